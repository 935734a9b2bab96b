"""
bmfontkit.formats.binary - BMFont binary descriptor

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from ..base.struct import little_endian as le, StructError
from ..base.binary import byte_to_flags, flags_to_byte, split_cstring
from ..builder import FontBuilder
from ..charset import Charset, Null, Undefined
from ..channels import Packing, Chnl
from ..font import Info, Common, Page, Char, Kerning, Padding, Spacing
from ..storage import loaders, savers
from ..errors import (
    ParseError, InvalidBinaryError, InvalidBinaryBlockError,
    UnsupportedBinaryVersionError, InvalidBinaryEncodingError,
    IncongruentPageNameLenError, EmbeddedNulError, ValueRangeError,
    BufferUnderflowError, BufferOverflowError,
)


# binary format: https://www.angelcode.com/products/bmfont/doc/file_format.html

BMF_MAGIC = b'BMF'
VERSION = 3


##############################################################################
# interface

@loaders.register(
    name='binary',
    magic=(BMF_MAGIC,),
    patterns=(),
)
def load_binary(instream, settings=None):
    """Load font from BMFont binary descriptor."""
    return from_stream(instream, settings)


@savers.register(linked=load_binary)
def save_binary(font, outstream, strict:bool=True):
    """
    Save font to BMFont binary descriptor.

    strict: reject fonts that other binary readers may misinterpret (default: True)
    """
    to_stream(outstream, font, strict=strict)


def from_bytes(data, settings=None):
    """Load font from binary descriptor bytes."""
    builder = FontBuilder()
    _BinaryReader(data, builder).load()
    return builder.build(settings)


def from_stream(instream, settings=None):
    """Load font from binary stream."""
    return from_bytes(instream.read(), settings)


def to_bytes(font, strict=True):
    """Store font as binary descriptor bytes."""
    return bytes(_BinaryWriter(font, strict).store())


def to_stream(outstream, font, strict=True):
    """Write font to binary stream."""
    outstream.write(to_bytes(font, strict))


def packed_size(font):
    """Length in bytes of the binary descriptor for a font."""
    return _BinaryWriter(font).size()


##############################################################################
# BMFont binary layouts
# fixed-width layouts are named for the version that introduced them

_HEAD = le.Struct(
    magic='3s',
    version='uint8',
)

_BLKHEAD = le.Struct(
    typeId='uint8',
    blkSize='uint32',
)

# block type ids
_BLK_INFO = 1
_BLK_COMMON = 2
_BLK_PAGES = 3
_BLK_CHARS = 4
_BLK_KERNINGS = 5

_BLOCK_NAMES = {
    _BLK_INFO: 'info',
    _BLK_COMMON: 'common',
    _BLK_PAGES: 'pages',
    _BLK_CHARS: 'chars',
    _BLK_KERNINGS: 'kernings',
}

# info block, followed by NUL-terminated face name
_INFO_V2 = le.Struct(
    fontSize='int16',
    bitField='uint8',
    charSet='uint8',
    stretchH='uint16',
    aa='uint8',
    paddingUp='uint8',
    paddingRight='uint8',
    paddingDown='uint8',
    paddingLeft='uint8',
    spacingHoriz='uint8',
    spacingVert='uint8',
    outline='uint8',
)

# info bitfield
_INFO_BITS = {
    'smooth': 1 << 7,
    'unicode': 1 << 6,
    'italic': 1 << 5,
    'bold': 1 << 4,
    # fixedHeight is 1 << 3, ignored
}

_COMMON_V3 = le.Struct(
    lineHeight='uint16',
    base='uint16',
    scaleW='uint16',
    scaleH='uint16',
    pages='uint16',
    bitField='uint8',
    alphaChnl='uint8',
    redChnl='uint8',
    greenChnl='uint8',
    blueChnl='uint8',
)

# common bitfield
_COMMON_BITS = {
    'packed': 1 << 0,
}

_CHAR_V1 = le.Struct(
    id='uint32',
    x='uint16',
    y='uint16',
    width='uint16',
    height='uint16',
    xoffset='int16',
    yoffset='int16',
    xadvance='int16',
    page='uint8',
    chnl='uint8',
)

_KERNING_V1 = le.Struct(
    first='uint32',
    second='uint32',
    amount='int16',
)


def _info_layout(version):
    if version in (2, 3):
        return _INFO_V2
    raise UnsupportedBinaryVersionError(version)

def _common_layout(version):
    if version == 3:
        return _COMMON_V3
    raise UnsupportedBinaryVersionError(version)

def _char_layout(version):
    if version in (1, 2, 3):
        return _CHAR_V1
    raise UnsupportedBinaryVersionError(version)

def _kerning_layout(version):
    if version in (1, 2, 3):
        return _KERNING_V1
    raise UnsupportedBinaryVersionError(version)


def _decode_string(data, entity):
    try:
        return bytes(data).decode('utf-8')
    except UnicodeDecodeError as e:
        raise ParseError(f'UTF8: {e}', entity=entity) from e

def _encode_string(value, path):
    if '\0' in value:
        raise EmbeddedNulError(path, value)
    return value.encode('utf-8') + b'\0'


##############################################################################
# reader

class _BinaryReader:
    """Feed binary descriptor blocks to a font builder."""

    def __init__(self, data, builder):
        self._view = memoryview(data).cast('B')
        self._builder = builder
        self._version = None

    def load(self):
        """Read magic and all blocks."""
        view = self._view
        if len(view) < _HEAD.size:
            raise BufferUnderflowError('magic')
        head = _HEAD.from_bytes(view)
        if head.magic != BMF_MAGIC:
            raise InvalidBinaryError(view[:_HEAD.size])
        if head.version != VERSION:
            raise UnsupportedBinaryVersionError(head.version)
        self._version = head.version
        offset = _HEAD.size
        while offset < len(view):
            block_id, block, offset = self._next_block(offset)
            self._read_block(block_id, block)

    def _next_block(self, offset):
        """Slice the next block payload out of the buffer."""
        view = self._view
        if len(view) - offset < _BLKHEAD.size:
            raise BufferUnderflowError('block header')
        blkhead = _BLKHEAD.from_bytes(view, offset)
        start = offset + _BLKHEAD.size
        end = start + blkhead.blkSize
        if end > len(view):
            raise BufferUnderflowError(
                _BLOCK_NAMES.get(blkhead.typeId, 'block')
            )
        return blkhead.typeId, view[start:end], end

    def _read_block(self, block_id, block):
        logging.debug(
            'Reading block %d (%s), %d bytes',
            block_id, _BLOCK_NAMES.get(block_id, 'unknown'), len(block)
        )
        if block_id == _BLK_INFO:
            self._builder.set_info(self._read_info(block))
        elif block_id == _BLK_COMMON:
            self._builder.set_common(self._read_common(block))
        elif block_id == _BLK_PAGES:
            for page in self._read_pages(block):
                self._builder.add_page(page)
        elif block_id == _BLK_CHARS:
            for char in self._read_records(block, _char_layout(self._version), 'chars'):
                self._builder.add_char(Char(
                    id=char.id, x=char.x, y=char.y,
                    width=char.width, height=char.height,
                    xoffset=char.xoffset, yoffset=char.yoffset,
                    xadvance=char.xadvance, page=char.page,
                    chnl=self._convert(Chnl.from_byte, char.chnl, 'chnl'),
                ))
        elif block_id == _BLK_KERNINGS:
            layout = _kerning_layout(self._version)
            for kern in self._read_records(block, layout, 'kernings'):
                self._builder.add_kerning(Kerning(
                    first=kern.first, second=kern.second, amount=kern.amount,
                ))
        else:
            raise InvalidBinaryBlockError(block_id)

    @staticmethod
    def _convert(converter, value, entity):
        try:
            return converter(value)
        except ValueError as e:
            raise ParseError(str(e), entity=entity) from e

    def _read_info(self, block):
        layout = _info_layout(self._version)
        if len(block) < layout.size:
            raise BufferUnderflowError('info')
        bininfo = layout.from_bytes(block)
        data = bytes(block)
        face, end = split_cstring(data, layout.size)
        if face is None:
            raise ParseError('missing NUL', entity='info face')
        if end != len(data):
            raise BufferOverflowError('info')
        flags = byte_to_flags(bininfo.bitField, _INFO_BITS)
        return Info(
            face=_decode_string(face, 'info face'),
            size=bininfo.fontSize,
            charset=Charset.from_byte(bininfo.charSet, flags['unicode']),
            stretch_h=bininfo.stretchH,
            aa=bininfo.aa,
            padding=Padding(
                bininfo.paddingUp, bininfo.paddingRight,
                bininfo.paddingDown, bininfo.paddingLeft,
            ),
            spacing=Spacing(bininfo.spacingHoriz, bininfo.spacingVert),
            outline=bininfo.outline,
            **flags,
        )

    def _read_common(self, block):
        layout = _common_layout(self._version)
        if len(block) < layout.size:
            raise BufferUnderflowError('common')
        if len(block) > layout.size:
            raise BufferOverflowError('common')
        bincommon = layout.from_bytes(block)
        return Common(
            line_height=bincommon.lineHeight,
            base=bincommon.base,
            scale_w=bincommon.scaleW,
            scale_h=bincommon.scaleH,
            pages=bincommon.pages,
            alpha_chnl=self._convert(Packing.from_byte, bincommon.alphaChnl, 'alphaChnl'),
            red_chnl=self._convert(Packing.from_byte, bincommon.redChnl, 'redChnl'),
            green_chnl=self._convert(Packing.from_byte, bincommon.greenChnl, 'greenChnl'),
            blue_chnl=self._convert(Packing.from_byte, bincommon.blueChnl, 'blueChnl'),
            **byte_to_flags(bincommon.bitField, _COMMON_BITS),
        )

    def _read_pages(self, block):
        """Iterate over the NUL-terminated page names, in id order."""
        data = bytes(block)
        offset = 0
        page_id = 0
        while offset < len(data):
            name, offset = split_cstring(data, offset)
            if name is None:
                raise ParseError('missing NUL', entity='page id')
            yield Page(id=page_id, file=_decode_string(name, 'page id'))
            page_id += 1

    @staticmethod
    def _read_records(block, layout, entity):
        """Unpack a block of fixed-size records; partial records are an underflow."""
        count, remainder = divmod(len(block), layout.size)
        if remainder:
            raise BufferUnderflowError(entity)
        if not count:
            return ()
        return (layout * count).from_bytes(block)


##############################################################################
# writer

class _BinaryWriter:
    """Pack a font into a binary descriptor."""

    def __init__(self, font, strict=True, version=VERSION):
        self._font = font
        self._strict = strict
        self._version = version

    def size(self):
        """Pre-compute the packed length."""
        font = self._font
        size = _HEAD.size
        size += _BLKHEAD.size + self._info_size()
        size += _BLKHEAD.size + _common_layout(self._version).size
        size += _BLKHEAD.size + self._pages_size()
        size += _BLKHEAD.size + len(font.chars) * _char_layout(self._version).size
        if font.kernings:
            size += _BLKHEAD.size + len(font.kernings) * _kerning_layout(self._version).size
        return size

    def _info_size(self):
        return _info_layout(self._version).size + len(self._font.info.face.encode('utf-8')) + 1

    def _pages_size(self):
        return sum(len(_page.encode('utf-8')) + 1 for _page in self._font.pages)

    def store(self):
        """Pack the font into a bytearray allocated once."""
        self._buffer = bytearray(self.size())
        self._offset = 0
        self._write(_HEAD, magic=BMF_MAGIC, version=self._version)
        self._store_info()
        self._store_common()
        self._store_pages()
        self._store_chars()
        self._store_kernings()
        if self._offset != len(self._buffer):
            raise BufferOverflowError('font')
        return self._buffer

    def _put(self, data):
        end = self._offset + len(data)
        self._buffer[self._offset:end] = data
        self._offset = end

    def _write(self, layout, **fields):
        try:
            self._put(bytes(layout(**fields)))
        except StructError as e:
            if e.field is None:
                raise
            raise ValueRangeError(e.field, e.value) from e

    def _block(self, block_id, size):
        self._write(_BLKHEAD, typeId=block_id, blkSize=size)

    def _store_info(self):
        info = self._font.info
        if info.unicode and info.charset != Null():
            if self._strict:
                raise InvalidBinaryEncodingError(info.unicode, info.charset)
        if isinstance(info.charset, Undefined):
            logging.warning(
                'Charset `%s` has no binary representation; storing 0.', info.charset
            )
        self._block(_BLK_INFO, self._info_size())
        self._write(
            _info_layout(self._version),
            fontSize=info.size,
            bitField=flags_to_byte(
                _INFO_BITS,
                smooth=info.smooth, unicode=info.unicode,
                italic=info.italic, bold=info.bold,
            ),
            charSet=info.charset.to_byte(),
            stretchH=info.stretch_h,
            aa=info.aa,
            paddingUp=info.padding.up,
            paddingRight=info.padding.right,
            paddingDown=info.padding.down,
            paddingLeft=info.padding.left,
            spacingHoriz=info.spacing.horizontal,
            spacingVert=info.spacing.vertical,
            outline=info.outline,
        )
        self._put(_encode_string(info.face, 'info face'))

    def _store_common(self):
        common = self._font.common
        layout = _common_layout(self._version)
        self._block(_BLK_COMMON, layout.size)
        self._write(
            layout,
            lineHeight=common.line_height,
            base=common.base,
            scaleW=common.scale_w,
            scaleH=common.scale_h,
            pages=common.pages,
            bitField=flags_to_byte(_COMMON_BITS, packed=common.packed),
            alphaChnl=int(common.alpha_chnl),
            redChnl=int(common.red_chnl),
            greenChnl=int(common.green_chnl),
            blueChnl=int(common.blue_chnl),
        )

    def _store_pages(self):
        pages = self._font.pages
        if self._strict and len(set(len(_page.encode('utf-8')) for _page in pages)) > 1:
            raise IncongruentPageNameLenError()
        self._block(_BLK_PAGES, self._pages_size())
        for page in pages:
            self._put(_encode_string(page, 'page id'))

    def _store_chars(self):
        chars = self._font.chars
        layout = _char_layout(self._version)
        self._block(_BLK_CHARS, len(chars) * layout.size)
        for char in chars:
            self._write(
                layout,
                id=char.id, x=char.x, y=char.y,
                width=char.width, height=char.height,
                xoffset=char.xoffset, yoffset=char.yoffset,
                xadvance=char.xadvance, page=char.page, chnl=int(char.chnl),
            )

    def _store_kernings(self):
        kernings = self._font.kernings
        if not kernings:
            return
        layout = _kerning_layout(self._version)
        self._block(_BLK_KERNINGS, len(kernings) * layout.size)
        for kern in kernings:
            self._write(layout, first=kern.first, second=kern.second, amount=kern.amount)
