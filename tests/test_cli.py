"""
bmfontkit test suite
command-line interface tests
"""

import unittest

import bmfontkit
from bmfontkit.scripts import convert

from .base import BaseTester


class TestConvert(BaseTester):

    def test_convert_to_binary(self):
        outfile = self.temp_path / 'small.bin'
        convert.main([
            str(self.font_path / 'small.xml'), str(outfile), '--to', 'binary'
        ])
        self.assertTrue(outfile.read_bytes().startswith(b'BMF\x03'))
        self.assertEqual(bmfontkit.load(outfile), self.small)

    def test_convert_by_suffix(self):
        outfile = self.temp_path / 'small.json'
        convert.main([str(self.font_path / 'small.fnt'), str(outfile)])
        self.assertEqual(bmfontkit.json.from_bytes(outfile.read_bytes()), self.small)

    def test_convert_settings(self):
        infile = self.temp_path / 'bad.fnt'
        infile.write_bytes(
            self.read_fixture('small.fnt').replace(b'chars count=2', b'chars count=9')
        )
        outfile = self.temp_path / 'small.xml'
        with self.assertRaises(SystemExit):
            convert.main([str(infile), str(outfile)])
        convert.main([str(infile), str(outfile), '--ignore-counts'])
        self.assertEqual(bmfontkit.load(outfile), self.small)

    def test_overwrite(self):
        outfile = self.temp_path / 'small.fnt'
        outfile.write_bytes(b'')
        with self.assertRaises(SystemExit):
            convert.main([str(self.font_path / 'small.json'), str(outfile)])
        convert.main([
            str(self.font_path / 'small.json'), str(outfile), '--overwrite'
        ])
        self.assertEqual(bmfontkit.load(outfile), self.small)

    def test_missing_input(self):
        with self.assertRaises(SystemExit) as cm:
            convert.main([
                str(self.temp_path / 'missing.fnt'), str(self.temp_path / 'out.fnt')
            ])
        self.assertEqual(cm.exception.code, 1)

    def test_debug_raises(self):
        with self.assertRaises(FileNotFoundError):
            convert.main([
                str(self.temp_path / 'missing.fnt'),
                str(self.temp_path / 'out.fnt'),
                '--debug',
            ])


if __name__ == '__main__':
    unittest.main()
