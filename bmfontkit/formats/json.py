"""
bmfontkit.formats.json - BMFont JSON descriptor

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import json
import logging

from ..builder import (
    FontBuilder, INFO_ATTRIBUTES, COMMON_ATTRIBUTES, CHAR_ATTRIBUTES,
    KERNING_ATTRIBUTES,
)
from ..tagged import Attribute
from ..storage import loaders, savers
from ..errors import ParseError
from .common import (
    document_attribute, info_attributes, common_attributes,
    char_attributes, kerning_attributes,
)


# json format: https://github.com/Jam3/load-bmfont/blob/master/json-spec.md


##############################################################################
# interface

@loaders.register(
    name='json',
    magic=(b'{',),
    patterns=('*.json',),
    text=True,
)
def load_json(instream, settings=None):
    """Load font from BMFont JSON descriptor."""
    return from_stream(instream, settings)


@savers.register(linked=load_json)
def save_json(font, outstream):
    """Save font to BMFont JSON descriptor."""
    to_stream(outstream, font)


def from_bytes(data, settings=None):
    """Load font from JSON descriptor bytes."""
    try:
        tree = json.loads(data)
    except ValueError as e:
        raise ParseError(str(e), entity='json') from e
    builder = FontBuilder()
    _load_tree(tree, builder)
    return builder.build(settings)


def from_str(text, settings=None):
    """Load font from JSON descriptor string."""
    return from_bytes(text.encode('utf-8'), settings)


def from_stream(instream, settings=None):
    """Load font from binary stream holding a JSON descriptor."""
    return from_bytes(instream.read(), settings)


def to_str(font):
    """Store font as JSON descriptor string."""
    return json.dumps(_create_tree(font), indent=2)


def to_bytes(font):
    """Store font as utf-8 JSON descriptor bytes."""
    return to_str(font).encode('utf-8')


def to_stream(outstream, font):
    """Write font to binary stream as JSON descriptor."""
    outstream.write(to_bytes(font))


##############################################################################
# reader

# load-bmfont json carries extra members, e.g. `index` and `char` on chars
# or a top-level `distanceField`; members the descriptor doesn't define are skipped

def _load_tree(tree, builder):
    """Feed the descriptor object to the builder."""
    if not isinstance(tree, dict):
        raise ParseError('descriptor must be an object', entity='json')
    for key, value in tree.items():
        if key == 'info':
            builder.set_info_attributes(_attributes(key, value, INFO_ATTRIBUTES))
        elif key == 'common':
            builder.set_common_attributes(_attributes(key, value, COMMON_ATTRIBUTES))
        elif key == 'pages':
            for page_id, page in enumerate(_list(key, value)):
                if not isinstance(page, str):
                    raise ParseError(
                        f'expected file name, got {page!r}', entity='pages'
                    )
                builder.add_page_attributes((
                    Attribute(b'id', str(page_id), None),
                    Attribute(b'file', page, None),
                ))
        elif key == 'chars':
            for char in _list(key, value):
                builder.add_char_attributes(_attributes(key, char, CHAR_ATTRIBUTES))
        elif key == 'kernings':
            for kern in _list(key, value):
                builder.add_kerning_attributes(
                    _attributes(key, kern, KERNING_ATTRIBUTES)
                )
        else:
            logging.debug('Skipping unknown member `%s`.', key)


def _list(entity, value):
    if not isinstance(value, list):
        raise ParseError('expected array', entity=entity)
    return value


def _attributes(entity, obj, table):
    """JSON object members known to the attribute table, as builder attributes."""
    if not isinstance(obj, dict):
        raise ParseError('expected object', entity=entity)
    known = set(_key.decode('ascii') for _key, _, _ in table)
    for key in obj:
        if key not in known:
            logging.debug('%s: skipping unknown member `%s`.', entity, key)
    return tuple(
        document_attribute(_key, _to_value(_value))
        for _key, _value in obj.items()
        if _key in known
    )


def _to_value(value):
    """Convert a JSON member value to its descriptor string."""
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ','.join(_to_value(_item) for _item in value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value
    # floats, nulls and objects don't parse as attribute values
    return repr(value)


##############################################################################
# writer

def _create_tree(font):
    return {
        'pages': list(font.pages),
        'chars': [char_attributes(_char) for _char in font.chars],
        'info': {
            _k: (list(_v) if isinstance(_v, tuple) else _v)
            for _k, _v in info_attributes(font.info).items()
        },
        'common': common_attributes(font.common),
        'kernings': [kerning_attributes(_kern) for _kern in font.kernings],
    }
