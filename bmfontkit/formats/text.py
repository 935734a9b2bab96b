"""
bmfontkit.formats.text - BMFont text descriptor

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from ..builder import FontBuilder
from ..tagged import TaggedAttributes
from ..parse import to_str as _decode
from ..storage import loaders, savers
from ..errors import InvalidTagError, ParseError
from .common import (
    check_value, info_attributes, common_attributes, to_str as _value_str,
)


# text format: https://www.angelcode.com/products/bmfont/doc/file_format.html

EOL = '\r\n'


##############################################################################
# interface

@loaders.register(
    name='text',
    magic=(b'info ', b'info\t'),
    patterns=('*.fnt', '*.txt'),
    text=True,
)
def load_text(instream, settings=None):
    """Load font from BMFont text descriptor."""
    return from_stream(instream, settings)


@savers.register(linked=load_text)
def save_text(font, outstream):
    """Save font to BMFont text descriptor."""
    to_stream(outstream, font)


def from_bytes(data, settings=None):
    """Load font from text descriptor bytes."""
    builder = FontBuilder()
    _load_tags(TaggedAttributes(data), builder, settings)
    return builder.build(settings)


def from_str(text, settings=None):
    """Load font from text descriptor string."""
    return from_bytes(text.encode('utf-8'), settings)


def from_stream(instream, settings=None):
    """Load font from binary stream holding a text descriptor."""
    return from_bytes(instream.read(), settings)


def to_str(font):
    """Store font as text descriptor string."""
    return ''.join(_iter_lines(font))


def to_bytes(font):
    """Store font as utf-8 text descriptor bytes."""
    return to_str(font).encode('utf-8')


def to_stream(outstream, font):
    """Write font to binary stream as text descriptor."""
    outstream.write(to_bytes(font))


##############################################################################
# reader

def _load_tags(tokens, builder, settings):
    """Feed tagged lines to the builder."""
    ignore_invalid_tags = settings is not None and settings.ignore_invalid_tags
    while True:
        tag = tokens.next_tag()
        if tag is None:
            break
        name, line = tag
        if name == b'info':
            builder.set_info_attributes(tokens.iter_attributes(), line)
        elif name == b'common':
            builder.set_common_attributes(tokens.iter_attributes(), line)
        elif name == b'page':
            builder.add_page_attributes(tokens.iter_attributes(), line)
        elif name == b'chars':
            builder.set_char_count_attributes(tokens.iter_attributes(), line)
        elif name == b'char':
            builder.add_char_attributes(tokens.iter_attributes())
        elif name == b'kernings':
            builder.set_kerning_count_attributes(tokens.iter_attributes(), line)
        elif name == b'kerning':
            builder.add_kerning_attributes(tokens.iter_attributes())
        else:
            try:
                name = _decode(name)
            except ValueError as e:
                raise ParseError(str(e), entity='tag', line=line) from e
            if not ignore_invalid_tags:
                raise InvalidTagError(name, line=line)
            logging.warning('line %d: skipping invalid tag `%s`.', line, name)
            for _ in tokens.iter_attributes():
                pass


##############################################################################
# writer

def _iter_lines(font):
    info = info_attributes(font.info)
    check_value('info face', info['face'])
    check_value('info charset', info['charset'])
    yield _attribute_line('info', info, quoted=('face', 'charset'))
    yield _attribute_line('common', common_attributes(font.common))
    for page_id, page in enumerate(font.pages):
        yield f'page id={page_id} file="{check_value("page id", page)}"' + EOL
    yield f'chars count={len(font.chars)}' + EOL
    for char in font.chars:
        yield (
            f'char id={char.id:<4} x={char.x:<5} y={char.y:<5} '
            f'width={char.width:<5} height={char.height:<5} '
            f'xoffset={char.xoffset:<5} yoffset={char.yoffset:<5} '
            f'xadvance={char.xadvance:<5} page={char.page:<2} '
            f'chnl={int(char.chnl):<2}'
        ) + EOL
    yield f'kernings count={len(font.kernings)}' + EOL
    for kern in font.kernings:
        yield (
            f'kerning first={kern.first:<3} second={kern.second:<3} '
            f'amount={kern.amount:<4}'
        ) + EOL


def _attribute_line(tag, attributes, quoted=()):
    """Create a tagged line of key=value pairs."""
    return '{} {}'.format(tag, ' '.join(
        f'{_k}="{_v}"' if _k in quoted else f'{_k}={_value_str(_v)}'
        for _k, _v in attributes.items()
    )) + EOL
