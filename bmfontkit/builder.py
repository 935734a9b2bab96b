"""
bmfontkit.builder - assemble and validate fonts from descriptor blocks

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from . import parse
from .charset import Charset
from .channels import Packing, Chnl
from .font import Font, Info, Common, Page, Char, Kerning, Padding, Spacing
from .settings import DEFAULT_SETTINGS
from .errors import (
    InternalError, ParseError,
    NoInfoBlockError, NoCommonBlockError,
    DuplicateInfoBlockError, DuplicateCommonBlockError,
    DuplicateCharCountError, DuplicateKerningCountError,
    BrokenPageListError, InvalidKeyError, DuplicateKeyError,
    InvalidCharCountError, InvalidKerningCountError, InvalidPageCountError,
    UnsafeValueStringError,
)


##############################################################################
# attribute tables: (key, field, parser)

def _padding(value):
    return Padding(*parse.array(parse.uint8, 4)(value))

def _spacing(value):
    return Spacing(*parse.array(parse.uint8, 2)(value))

def _charset(value):
    return Charset.parse(parse.to_str(value))


INFO_ATTRIBUTES = (
    (b'face', 'face', parse.string),
    (b'size', 'size', parse.int16),
    (b'bold', 'bold', parse.boolean),
    (b'italic', 'italic', parse.boolean),
    (b'charset', 'charset', _charset),
    (b'unicode', 'unicode', parse.boolean),
    (b'stretchH', 'stretch_h', parse.uint16),
    (b'smooth', 'smooth', parse.boolean),
    (b'aa', 'aa', parse.uint8),
    (b'padding', 'padding', _padding),
    (b'spacing', 'spacing', _spacing),
    (b'outline', 'outline', parse.uint8),
)

COMMON_ATTRIBUTES = (
    (b'lineHeight', 'line_height', parse.uint16),
    (b'base', 'base', parse.uint16),
    (b'scaleW', 'scale_w', parse.uint16),
    (b'scaleH', 'scale_h', parse.uint16),
    (b'pages', 'pages', parse.uint16),
    (b'packed', 'packed', parse.boolean),
    (b'alphaChnl', 'alpha_chnl', Packing.parse),
    (b'redChnl', 'red_chnl', Packing.parse),
    (b'greenChnl', 'green_chnl', Packing.parse),
    (b'blueChnl', 'blue_chnl', Packing.parse),
)

PAGE_ATTRIBUTES = (
    (b'id', 'id', parse.uint16),
    (b'file', 'file', parse.string),
)

CHAR_ATTRIBUTES = (
    (b'id', 'id', parse.uint32),
    (b'x', 'x', parse.uint16),
    (b'y', 'y', parse.uint16),
    (b'width', 'width', parse.uint16),
    (b'height', 'height', parse.uint16),
    (b'xoffset', 'xoffset', parse.int16),
    (b'yoffset', 'yoffset', parse.int16),
    (b'xadvance', 'xadvance', parse.int16),
    (b'page', 'page', parse.uint8),
    (b'chnl', 'chnl', Chnl.parse),
)

KERNING_ATTRIBUTES = (
    (b'first', 'first', parse.uint32),
    (b'second', 'second', parse.uint32),
    (b'amount', 'amount', parse.int16),
)

COUNT_ATTRIBUTES = (
    (b'count', 'count', parse.uint32),
)


def _decode_key(key, line):
    try:
        return parse.to_str(key)
    except ValueError as e:
        raise ParseError(str(e), entity='key', line=line) from e


def load_attributes(table, attributes):
    """
    Convert attributes to a dict of field values following an attribute table.

    table: tuple of (key, field, parser)
    attributes: iterable of Attribute(key, value, line)
    """
    lookup = {_key: (_field, _parser) for _key, _field, _parser in table}
    values = {}
    for key, value, line in attributes:
        key = bytes(key)
        try:
            field, parser = lookup[key]
        except KeyError:
            raise InvalidKeyError(_decode_key(key, line), line=line) from None
        if field in values:
            raise DuplicateKeyError(_decode_key(key, line), line=line)
        try:
            values[field] = parser(value)
        except ValueError as e:
            raise ParseError(str(e), entity=_decode_key(key, line), line=line) from e
    return values


def check_string(path, value):
    """Reject C0 control characters and DEL."""
    if any(_c < ' ' or _c == '\x7f' for _c in value):
        raise UnsafeValueStringError(path, value)
    return value


##############################################################################
# builder

class FontBuilder:
    """
    Incremental, single-use font assembler.
    All descriptor encodings feed the same setters.
    """

    def __init__(self):
        self._info = None
        self._common = None
        self._pages = []
        self._chars = []
        self._char_count = None
        self._kernings = []
        self._kerning_count = None
        self._used = False

    def build(self, settings=None):
        """Validate and return the Font."""
        if self._used:
            raise InternalError('font builder has already been used')
        self._used = True
        settings = settings or DEFAULT_SETTINGS
        if not settings.ignore_counts:
            if self._char_count is not None and self._char_count != len(self._chars):
                raise InvalidCharCountError(self._char_count, len(self._chars))
            if (
                    self._kerning_count is not None
                    and self._kerning_count != len(self._kernings)
                ):
                raise InvalidKerningCountError(
                    self._kerning_count, len(self._kernings)
                )
        if self._info is None:
            raise NoInfoBlockError()
        if self._common is None:
            raise NoCommonBlockError()
        font = Font(
            info=self._info,
            common=self._common,
            pages=self._pages,
            chars=self._chars,
            kernings=self._kernings,
        )
        if not settings.ignore_counts and font.common.pages != len(font.pages):
            raise InvalidPageCountError(font.common.pages, len(font.pages))
        if not settings.allow_string_control_characters:
            for page in font.pages:
                check_string('page id', page)
            check_string('info face', font.info.face)
        logging.debug(
            'Built font `%s`: %d pages, %d chars, %d kernings.',
            font.info.face, len(font.pages), len(font.chars), len(font.kernings)
        )
        return font

    def set_info(self, info, line=None):
        if self._info is not None:
            raise DuplicateInfoBlockError(line=line)
        self._info = info

    def set_common(self, common, line=None):
        if self._common is not None:
            raise DuplicateCommonBlockError(line=line)
        self._common = common

    def add_page(self, page, line=None):
        """Add a page; page ids must be consecutive from 0."""
        if page.id != len(self._pages):
            raise BrokenPageListError(page.id, len(self._pages), line=line)
        self._pages.append(page.file)

    def add_char(self, char):
        self._chars.append(char)

    def set_char_count(self, count, line=None):
        if self._char_count is not None:
            raise DuplicateCharCountError(line=line)
        self._char_count = count

    def add_kerning(self, kerning):
        self._kernings.append(kerning)

    def set_kerning_count(self, count, line=None):
        if self._kerning_count is not None:
            raise DuplicateKerningCountError(line=line)
        self._kerning_count = count

    # attribute variants

    def set_info_attributes(self, attributes, line=None):
        self.set_info(Info(**load_attributes(INFO_ATTRIBUTES, attributes)), line)

    def set_common_attributes(self, attributes, line=None):
        self.set_common(Common(**load_attributes(COMMON_ATTRIBUTES, attributes)), line)

    def add_page_attributes(self, attributes, line=None):
        self.add_page(Page(**load_attributes(PAGE_ATTRIBUTES, attributes)), line)

    def add_char_attributes(self, attributes):
        self.add_char(Char(**load_attributes(CHAR_ATTRIBUTES, attributes)))

    def set_char_count_attributes(self, attributes, line=None):
        count = load_attributes(COUNT_ATTRIBUTES, attributes).get('count', 0)
        self.set_char_count(count, line)

    def add_kerning_attributes(self, attributes):
        self.add_kerning(Kerning(**load_attributes(KERNING_ATTRIBUTES, attributes)))

    def set_kerning_count_attributes(self, attributes, line=None):
        count = load_attributes(COUNT_ATTRIBUTES, attributes).get('count', 0)
        self.set_kerning_count(count, line)
