"""
bmfontkit.base.binary - binary utilities

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""


def byte_to_flags(byte, masks):
    """Unpack a bit field into a dict of booleans, given a dict of masks."""
    return {_name: bool(byte & _mask) for _name, _mask in masks.items()}


def flags_to_byte(masks, **flags):
    """Pack booleans into a bit field, given a dict of masks."""
    byte = 0
    for name, value in flags.items():
        if value:
            byte |= masks[name]
    return byte


def split_cstring(data, offset=0):
    """
    Get the NUL-terminated byte string starting at offset.
    Returns the bytes without terminator and the offset past the terminator;
    returns None, offset if there is no terminator.
    """
    end = data.find(b'\0', offset)
    if end < 0:
        return None, offset
    return data[offset:end], end + 1
