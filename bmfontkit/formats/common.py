"""
bmfontkit.formats.common - attribute tables shared by text, xml and json

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from ..tagged import Attribute
from ..parse import normalise_bool_literal
from ..errors import UnsupportedValueEncodingError


def check_value(path, value, forbidden='"'):
    """Reject C0 controls, DEL and other characters the encoding can't hold."""
    if any(_c < ' ' or _c == '\x7f' or _c in forbidden for _c in value):
        raise UnsupportedValueEncodingError(path, value)
    return value


# attribute dicts in descriptor key order
# booleans as 0/1, padding and spacing as tuples

def info_attributes(info):
    return {
        'face': info.face,
        'size': info.size,
        'bold': int(info.bold),
        'italic': int(info.italic),
        'charset': str(info.charset),
        'unicode': int(info.unicode),
        'stretchH': info.stretch_h,
        'smooth': int(info.smooth),
        'aa': info.aa,
        'padding': tuple(info.padding),
        'spacing': tuple(info.spacing),
        'outline': info.outline,
    }


def common_attributes(common):
    return {
        'lineHeight': common.line_height,
        'base': common.base,
        'scaleW': common.scale_w,
        'scaleH': common.scale_h,
        'pages': common.pages,
        'packed': int(common.packed),
        'alphaChnl': int(common.alpha_chnl),
        'redChnl': int(common.red_chnl),
        'greenChnl': int(common.green_chnl),
        'blueChnl': int(common.blue_chnl),
    }


def char_attributes(char):
    return {
        'id': char.id,
        'x': char.x,
        'y': char.y,
        'width': char.width,
        'height': char.height,
        'xoffset': char.xoffset,
        'yoffset': char.yoffset,
        'xadvance': char.xadvance,
        'page': char.page,
        'chnl': int(char.chnl),
    }


def kerning_attributes(kerning):
    return {
        'first': kerning.first,
        'second': kerning.second,
        'amount': kerning.amount,
    }


def to_str(value):
    """Convert attribute value to its descriptor string."""
    if isinstance(value, (list, tuple)):
        return ','.join(str(_item) for _item in value)
    return str(value)


# keys that take true/false literals in xml and json documents
BOOLEAN_KEYS = ('bold', 'italic', 'unicode', 'smooth', 'packed')


def document_attribute(key, value):
    """Builder attribute from an xml or json member."""
    if key in BOOLEAN_KEYS:
        value = normalise_bool_literal(value)
    return Attribute(key.encode('utf-8'), value, None)
