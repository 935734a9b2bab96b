"""
bmfontkit.formats.xml - BMFont XML descriptor

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
import xml.etree.ElementTree as etree

from ..builder import FontBuilder
from ..storage import loaders, savers
from ..errors import InvalidTagError, ParseError
from .common import (
    check_value, document_attribute, info_attributes, common_attributes,
    char_attributes, kerning_attributes, to_str as _value_str,
)


##############################################################################
# interface

@loaders.register(
    name='xml',
    magic=(b'<?xml', b'<font'),
    patterns=('*.xml',),
    text=True,
)
def load_xml(instream, settings=None):
    """Load font from BMFont XML descriptor."""
    return from_stream(instream, settings)


@savers.register(linked=load_xml)
def save_xml(font, outstream):
    """Save font to BMFont XML descriptor."""
    to_stream(outstream, font)


def from_bytes(data, settings=None):
    """Load font from XML descriptor bytes."""
    try:
        root = etree.fromstring(data)
    except etree.ParseError as e:
        raise ParseError(str(e), entity='xml') from e
    builder = FontBuilder()
    _XMLReader(builder, settings).load(root)
    return builder.build(settings)


def from_str(text, settings=None):
    """Load font from XML descriptor string."""
    return from_bytes(text.encode('utf-8'), settings)


def from_stream(instream, settings=None):
    """Load font from binary stream holding an XML descriptor."""
    return from_bytes(instream.read(), settings)


def to_str(font):
    """Store font as XML descriptor string."""
    root = _create_tree(font)
    etree.indent(root, space='  ')
    return '<?xml version="1.0"?>\n' + etree.tostring(root, encoding='unicode') + '\n'


def to_bytes(font):
    """Store font as utf-8 XML descriptor bytes."""
    return to_str(font).encode('utf-8')


def to_stream(outstream, font):
    """Write font to binary stream as XML descriptor."""
    outstream.write(to_bytes(font))


##############################################################################
# reader

class _XMLReader:
    """Feed the <font> element tree to a font builder."""

    def __init__(self, builder, settings=None):
        self._builder = builder
        self._ignore_invalid_tags = (
            settings is not None and settings.ignore_invalid_tags
        )

    def load(self, root):
        if root.tag != 'font':
            raise ParseError(
                f'root should be <font>, not <{root.tag}>', entity='xml'
            )
        if root.attrib:
            raise ParseError('font: unexpected attributes', entity='xml')
        for child in self._children(root):
            if child.tag == 'info':
                self._builder.set_info_attributes(_attributes(child))
            elif child.tag == 'common':
                self._builder.set_common_attributes(_attributes(child))
            elif child.tag == 'pages':
                for page in self._children(child, 'page'):
                    self._builder.add_page_attributes(_attributes(page))
            elif child.tag == 'chars':
                self._builder.set_char_count_attributes(_attributes(child))
                for char in self._children(child, 'char'):
                    self._builder.add_char_attributes(_attributes(char))
            elif child.tag == 'kernings':
                self._builder.set_kerning_count_attributes(_attributes(child))
                for kern in self._children(child, 'kerning'):
                    self._builder.add_kerning_attributes(_attributes(kern))
            else:
                self._invalid(child)

    def _children(self, node, tag=None):
        """Iterate over child elements, rejecting non-whitespace text."""
        _check_text(node.tag, node.text)
        for child in node:
            _check_text(node.tag, child.tail)
            if tag is None or child.tag == tag:
                yield child
            else:
                self._invalid(child)

    def _invalid(self, node):
        if not self._ignore_invalid_tags:
            raise InvalidTagError(node.tag)
        logging.warning('Skipping invalid element <%s>.', node.tag)


def _check_text(tag, text):
    if text and text.strip():
        raise ParseError(f'{tag}: unexpected text', entity='xml')


def _attributes(node):
    """Element attributes as builder attributes."""
    return (
        document_attribute(_key, _value)
        for _key, _value in node.attrib.items()
    )


##############################################################################
# writer

def _create_tree(font):
    """Build the <font> element tree."""
    info = info_attributes(font.info)
    check_value('info face', info['face'], forbidden='')
    check_value('info charset', info['charset'], forbidden='')
    root = etree.Element('font')
    etree.SubElement(root, 'info', _tostrdict(info))
    etree.SubElement(root, 'common', _tostrdict(common_attributes(font.common)))
    pages = etree.SubElement(root, 'pages')
    for page_id, page in enumerate(font.pages):
        etree.SubElement(pages, 'page', {
            'id': str(page_id),
            'file': check_value('page id', page, forbidden=''),
        })
    chars = etree.SubElement(root, 'chars', count=str(len(font.chars)))
    for char in font.chars:
        etree.SubElement(chars, 'char', _tostrdict(char_attributes(char)))
    kernings = etree.SubElement(root, 'kernings', count=str(len(font.kernings)))
    for kern in font.kernings:
        etree.SubElement(kernings, 'kerning', _tostrdict(kerning_attributes(kern)))
    return root


def _tostrdict(indict):
    return {_k: _value_str(_v) for _k, _v in indict.items()}
