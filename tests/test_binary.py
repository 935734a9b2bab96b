"""
bmfontkit test suite
binary descriptor tests
"""

import io
import unittest
from dataclasses import replace

from bmfontkit import Font, Info, Common, Charset, Tagged, LoadSettings
from bmfontkit.formats import binary
from bmfontkit.base.struct import little_endian as le, StructError
from bmfontkit.errors import (
    InvalidBinaryError, InvalidBinaryBlockError, UnsupportedBinaryVersionError,
    InvalidBinaryEncodingError, IncongruentPageNameLenError,
    EmbeddedNulError, ValueRangeError, UnsafeValueStringError,
    BufferUnderflowError, BufferOverflowError,
)

from .base import BaseTester


# header, then info block header and payload for face 'Small Test'
_COMMON_OFFSET = 4 + 5 + 14 + len('Small Test') + 1


class TestBinary(BaseTester):

    def test_roundtrip(self):
        data = binary.to_bytes(self.small)
        self.assertEqual(binary.from_bytes(data), self.small)

    def test_stream(self):
        stream = io.BytesIO()
        binary.to_stream(stream, self.small)
        stream.seek(0)
        self.assertEqual(binary.from_stream(stream), self.small)

    def test_layout(self):
        data = binary.to_bytes(self.small)
        self.assertEqual(data[:4], b'BMF\x03')
        # info block id and size
        self.assertEqual(data[4], 1)
        self.assertEqual(int.from_bytes(data[5:9], 'little'), 14 + 11)
        # smooth and unicode bits set
        self.assertEqual(data[11], 0xc0)
        self.assertEqual(data[_COMMON_OFFSET], 2)
        self.assertEqual(len(data), 147)
        self.assertEqual(binary.packed_size(self.small), 147)

    def test_info_bits(self):
        font = replace(self.small, info=replace(self.small.info, bold=True, italic=True))
        data = binary.to_bytes(font)
        self.assertEqual(data[11], 0xf0)
        self.assertEqual(binary.from_bytes(data), font)

    def test_single_page_no_kernings(self):
        font = Font(common=Common(pages=1), pages=['a.png'])
        data = binary.to_bytes(font)
        # header, info, common, pages, chars; no kernings block
        self.assertEqual(len(data), 4 + (5+15) + (5+15) + (5+6) + 5)
        self.assertEqual(binary.from_bytes(data), font)
        self.assertEqual(binary.from_bytes(data).info.charset, Tagged(0))

    def test_underflow(self):
        data = binary.to_bytes(self.small)
        with self.assertRaises(BufferUnderflowError):
            binary.from_bytes(data[:-1])
        with self.assertRaises(BufferUnderflowError):
            binary.from_bytes(data + b'\x05')
        with self.assertRaises(BufferUnderflowError):
            binary.from_bytes(b'BM')

    def test_partial_record(self):
        font = replace(self.small, kernings=())
        data = binary.to_bytes(font)
        # shorten the last char record and its block size
        chars_offset = len(data) - 5 - 40
        self.assertEqual(data[chars_offset], 4)
        data = (
            data[:chars_offset+1] + (39).to_bytes(4, 'little')
            + data[chars_offset+5:-1]
        )
        with self.assertRaises(BufferUnderflowError):
            binary.from_bytes(data)

    def test_overflow(self):
        data = binary.to_bytes(self.small)
        start = _COMMON_OFFSET + 5
        data = (
            data[:_COMMON_OFFSET+1] + (16).to_bytes(4, 'little')
            + data[start:start+15] + b'\0' + data[start+15:]
        )
        with self.assertRaises(BufferOverflowError):
            binary.from_bytes(data)

    def test_invalid_block(self):
        data = binary.to_bytes(self.small) + b'\x06\0\0\0\0'
        with self.assertRaises(InvalidBinaryBlockError) as cm:
            binary.from_bytes(data)
        self.assertEqual(cm.exception.id, 6)

    def test_invalid_magic(self):
        data = binary.to_bytes(self.small)
        with self.assertRaises(InvalidBinaryError):
            binary.from_bytes(b'BMX' + data[3:])

    def test_unsupported_version(self):
        data = binary.to_bytes(self.small)
        with self.assertRaises(UnsupportedBinaryVersionError) as cm:
            binary.from_bytes(data[:3] + b'\xff' + data[4:])
        self.assertEqual(cm.exception.version, 0xff)

    def test_strict_encoding(self):
        font = replace(self.small, info=replace(self.small.info, charset=Tagged(0)))
        with self.assertRaises(InvalidBinaryEncodingError):
            binary.to_bytes(font)
        # byte 0 with unicode set reads back as no charset
        data = binary.to_bytes(font, strict=False)
        self.assertEqual(binary.from_bytes(data), self.small)

    def test_incongruent_page_names(self):
        font = replace(
            self.small,
            common=replace(self.small.common, pages=2),
            pages=('small_sheet_0.png', 'sheet_1.png'),
        )
        with self.assertRaises(IncongruentPageNameLenError):
            binary.to_bytes(font)
        data = binary.to_bytes(font, strict=False)
        self.assertEqual(binary.from_bytes(data).pages, font.pages)

    def test_embedded_nul(self):
        font = replace(self.small, info=replace(self.small.info, face='\0'))
        with self.assertRaises(EmbeddedNulError):
            binary.to_bytes(font)
        font = replace(self.small, pages=('small_sheet_\0.png',))
        with self.assertRaises(EmbeddedNulError):
            binary.to_bytes(font)

    def test_value_range(self):
        font = replace(self.small, info=replace(self.small.info, size=40000))
        with self.assertRaises(ValueRangeError) as cm:
            binary.to_bytes(font)
        self.assertEqual(cm.exception.field, 'fontSize')

    def test_control_characters(self):
        font = replace(self.small, info=replace(self.small.info, face='Small\x01Test'))
        data = binary.to_bytes(font)
        with self.assertRaises(UnsafeValueStringError):
            binary.from_bytes(data)
        settings = LoadSettings(allow_string_control_characters=True)
        self.assertEqual(binary.from_bytes(data, settings), font)

    def test_undefined_charset(self):
        info = Info(charset=Charset.parse('KLINGON'))
        font = Font(info=info)
        with self.assertLogs(level='WARNING'):
            data = binary.to_bytes(font)
        self.assertEqual(binary.from_bytes(data).info.charset, Tagged(0))


class TestStruct(unittest.TestCase):

    layout = le.Struct(magic='3s', first='uint8', second='int16')

    def test_pack(self):
        value = self.layout(magic=b'BMF', first=1, second=-2)
        self.assertEqual(bytes(value), b'BMF\x01\xfe\xff')
        self.assertEqual(self.layout.size, 6)

    def test_unpack(self):
        value = self.layout.from_bytes(b'\0BMF\x01\x02\x01', 1)
        self.assertEqual(value.magic, b'BMF')
        self.assertEqual(value.second, 0x102)
        with self.assertRaises(StructError):
            self.layout.from_bytes(b'BMF')

    def test_range(self):
        with self.assertRaises(StructError) as cm:
            self.layout(second=0x8000)
        self.assertEqual(cm.exception.field, 'second')
        with self.assertRaises(StructError):
            self.layout(third=1)

    def test_array(self):
        records = (self.layout * 2).from_bytes(b'BMF\x01\0\0abc\x02\x03\0')
        self.assertEqual(len(records), 2)
        self.assertEqual([_r.first for _r in records], [1, 2])
        self.assertEqual(records[1].second, 3)


if __name__ == '__main__':
    unittest.main()
