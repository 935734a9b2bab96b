"""
bmfontkit.parse - attribute value parsers

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import re


# decimal only, with optional sign; no whitespace, no underscores
_UNSIGNED = re.compile('[+]?[0-9]+', re.ASCII)
_SIGNED = re.compile('[+-]?[0-9]+', re.ASCII)


def to_str(value):
    """Decode attribute value as strict UTF-8."""
    if isinstance(value, str):
        return value
    try:
        return bytes(value).decode('utf-8')
    except UnicodeDecodeError as e:
        raise ValueError(f'UTF8: {e}') from e


def _integer(name, signed, bits):
    """Create a range-checked decimal integer parser."""
    if signed:
        pattern = _SIGNED
        low, high = -(1 << (bits-1)), (1 << (bits-1)) - 1
    else:
        pattern = _UNSIGNED
        low, high = 0, (1 << bits) - 1

    def _parse(value):
        src = to_str(value)
        if not pattern.fullmatch(src):
            raise ValueError(f'integer: invalid digit in `{src}`')
        number = int(src)
        if not low <= number <= high:
            raise ValueError(f'integer: `{src}` out of {name} range')
        return number

    _parse.__name__ = name
    _parse.__doc__ = f'Parse decimal {name}.'
    return _parse


uint8 = _integer('uint8', False, 8)
uint16 = _integer('uint16', False, 16)
uint32 = _integer('uint32', False, 32)
int16 = _integer('int16', True, 16)


def boolean(value):
    """Parse a decimal integer as a boolean, nonzero is true."""
    return uint32(value) != 0


def string(value):
    """Parse a UTF-8 string value."""
    return to_str(value)


def array(parser, length):
    """Create a parser for a fixed-length comma-separated array."""

    def _parse(value):
        items = to_str(value).split(',')
        # a trailing separator does not start a new element
        if items[-1] == '':
            items.pop()
        if len(items) < length:
            raise ValueError('array underflow')
        if len(items) > length:
            raise ValueError('array overflow')
        return tuple(parser(_item.strip()) for _item in items)

    return _parse


def normalise_bool_literal(value):
    """Convert `true` and `false` literals from XML and JSON documents to 1 and 0."""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, str) and value.lower() in ('true', 'false'):
        return str(int(value.lower() == 'true'))
    return value
