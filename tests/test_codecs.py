"""
bmfontkit test suite
value and enumeration codec tests
"""

import unittest

from bmfontkit import parse
from bmfontkit.charset import Charset, Null, Tagged, Undefined, CHARSET_NUM_MAP
from bmfontkit.channels import Packing, Chnl


class TestCharset(unittest.TestCase):

    def test_roundtrip_all_bytes(self):
        for value in range(256):
            charset = Tagged(value)
            self.assertEqual(Charset.parse(str(charset)), charset)
            self.assertEqual(Charset.from_byte(charset.to_byte()), charset)

    def test_names(self):
        self.assertEqual(str(Tagged(0)), 'ANSI')
        self.assertEqual(str(Tagged(204)), 'RUSSIAN')
        self.assertEqual(str(Tagged(5)), '5')
        for name, value in CHARSET_NUM_MAP.items():
            self.assertEqual(Charset.parse(name), Tagged(value))

    def test_null(self):
        self.assertEqual(Charset.parse(''), Null())
        self.assertEqual(str(Null()), '')
        self.assertEqual(Null().to_byte(), 0)
        self.assertEqual(Charset.from_byte(0, unicode=True), Null())
        self.assertEqual(Charset.from_byte(0, unicode=False), Tagged(0))

    def test_undefined(self):
        self.assertEqual(Charset.parse('KLINGON'), Undefined('KLINGON'))
        self.assertEqual(Charset.parse('256'), Undefined('256'))
        self.assertEqual(str(Undefined('KLINGON')), 'KLINGON')
        self.assertEqual(Undefined('KLINGON').to_byte(), 0)

    def test_tagged_range(self):
        with self.assertRaises(ValueError):
            Tagged(256)


class TestChannels(unittest.TestCase):

    def test_packing(self):
        for value in range(5):
            self.assertEqual(Packing.from_byte(value), value)
            self.assertEqual(Packing.parse(str(value)), value)
        with self.assertRaises(ValueError):
            Packing.from_byte(5)
        with self.assertRaises(ValueError):
            Packing.parse('-1')

    def test_chnl(self):
        for value in range(16):
            self.assertEqual(Chnl.from_byte(value), value)
        with self.assertRaises(ValueError):
            Chnl.from_byte(16)
        chnl = Chnl.parse('12')
        self.assertTrue(chnl.red)
        self.assertTrue(chnl.alpha)
        self.assertFalse(chnl.green)
        self.assertFalse(chnl.blue)
        self.assertEqual(Chnl.RED | Chnl.GREEN | Chnl.BLUE | Chnl.ALPHA, Chnl.ALL)


class TestParse(unittest.TestCase):

    def test_integers(self):
        self.assertEqual(parse.uint8('255'), 255)
        self.assertEqual(parse.uint8(b'+7'), 7)
        self.assertEqual(parse.int16('-32768'), -32768)
        self.assertEqual(parse.uint32('4294967295'), 4294967295)
        for parser, value in (
                (parse.uint8, '256'),
                (parse.uint8, '-1'),
                (parse.int16, '32768'),
                (parse.uint16, ''),
                (parse.uint16, ' 1'),
                (parse.uint16, '1_000'),
                (parse.uint16, '0x10'),
            ):
            with self.subTest(parser=parser.__name__, value=value):
                with self.assertRaises(ValueError):
                    parser(value)

    def test_boolean(self):
        self.assertFalse(parse.boolean('0'))
        self.assertTrue(parse.boolean('1'))
        self.assertTrue(parse.boolean('2'))
        with self.assertRaises(ValueError):
            parse.boolean('true')

    def test_string(self):
        self.assertEqual(parse.string(b'caf\xc3\xa9'), 'café')
        with self.assertRaises(ValueError):
            parse.string(b'\xff')

    def test_array(self):
        padding = parse.array(parse.uint8, 4)
        self.assertEqual(padding('1,2,3,4'), (1, 2, 3, 4))
        self.assertEqual(padding('1, 2, 3, 4,'), (1, 2, 3, 4))
        with self.assertRaises(ValueError):
            padding('1,2,3')
        with self.assertRaises(ValueError):
            padding('1,2,3,4,5')

    def test_bool_literals(self):
        self.assertEqual(parse.normalise_bool_literal('true'), '1')
        self.assertEqual(parse.normalise_bool_literal('False'), '0')
        self.assertEqual(parse.normalise_bool_literal(True), '1')
        self.assertEqual(parse.normalise_bool_literal('7'), '7')


if __name__ == '__main__':
    unittest.main()
