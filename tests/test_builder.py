"""
bmfontkit test suite
font builder tests
"""

import unittest

from bmfontkit import FontBuilder, LoadSettings, Info, Common, Page, Char, Kerning
from bmfontkit.tagged import Attribute
from bmfontkit.errors import (
    InternalError, ParseError,
    NoInfoBlockError, NoCommonBlockError, DuplicateInfoBlockError,
    DuplicateCharCountError, BrokenPageListError,
    InvalidKeyError, DuplicateKeyError,
    InvalidCharCountError, InvalidKerningCountError, InvalidPageCountError,
    UnsafeValueStringError, InvalidCharPageError, InvalidKerningCharError,
)

from .base import BaseTester


def _attributes(**kwargs):
    return [Attribute(_k.encode(), _v.encode(), 1) for _k, _v in kwargs.items()]


class TestBuilder(BaseTester):

    def _builder(self, pages=0):
        builder = FontBuilder()
        builder.set_info(Info(face='Test'))
        builder.set_common(Common(pages=pages))
        return builder

    def test_no_info(self):
        with self.assertRaises(NoInfoBlockError):
            FontBuilder().build()

    def test_no_common(self):
        builder = FontBuilder()
        builder.set_info(Info())
        with self.assertRaises(NoCommonBlockError):
            builder.build()

    def test_duplicate_info(self):
        builder = FontBuilder()
        builder.set_info(Info())
        with self.assertRaises(DuplicateInfoBlockError) as cm:
            builder.set_info(Info(), line=7)
        self.assertEqual(cm.exception.line, 7)
        self.assertTrue(str(cm.exception).startswith('line 7: '))

    def test_single_use(self):
        builder = self._builder()
        builder.build()
        with self.assertRaises(InternalError):
            builder.build()

    def test_broken_page_list(self):
        builder = self._builder(pages=2)
        builder.add_page(Page(id=0, file='a.png'))
        with self.assertRaises(BrokenPageListError) as cm:
            builder.add_page(Page(id=2, file='b.png'))
        self.assertEqual(cm.exception.id, 2)
        self.assertEqual(cm.exception.expected, 1)

    def test_char_count(self):
        builder = self._builder()
        builder.set_char_count(2)
        for char_id in range(3):
            builder.add_char(Char(id=char_id))
        with self.assertRaises(InvalidCharCountError) as cm:
            builder.build()
        self.assertEqual((cm.exception.specified, cm.exception.realized), (2, 3))

    def test_ignore_counts(self):
        builder = self._builder(pages=1)
        builder.set_char_count(2)
        builder.set_kerning_count(5)
        for char_id in range(3):
            builder.add_char(Char(id=char_id))
        font = builder.build(LoadSettings(ignore_counts=True))
        self.assertEqual(len(font.chars), 3)
        self.assertEqual(len(font.pages), 0)

    def test_kerning_count(self):
        builder = self._builder()
        builder.set_kerning_count(1)
        with self.assertRaises(InvalidKerningCountError):
            builder.build()

    def test_page_count(self):
        builder = self._builder(pages=2)
        builder.add_page(Page(id=0, file='a.png'))
        with self.assertRaises(InvalidPageCountError):
            builder.build()

    def test_duplicate_count(self):
        builder = self._builder()
        builder.set_char_count(1)
        with self.assertRaises(DuplicateCharCountError):
            builder.set_char_count(1)

    def test_duplicate_char_ids_retained(self):
        builder = self._builder()
        builder.add_char(Char(id=65, x=1))
        builder.add_char(Char(id=65, x=2))
        font = builder.build()
        self.assertEqual([_c.x for _c in font.chars], [1, 2])

    def test_control_characters(self):
        builder = FontBuilder()
        builder.set_info(Info(face='a\x01b'))
        builder.set_common(Common())
        with self.assertRaises(UnsafeValueStringError) as cm:
            builder.build()
        self.assertEqual(cm.exception.path, 'info face')

    def test_allow_control_characters(self):
        builder = self._builder(pages=1)
        builder.add_page(Page(id=0, file='a\x7f.png'))
        settings = LoadSettings.create(allow_string_control_characters=True)
        font = builder.build(settings)
        self.assertEqual(font.pages, ('a\x7f.png',))

    def test_attributes(self):
        builder = FontBuilder()
        builder.set_info_attributes(_attributes(
            face='Test', bold='1', padding='1,2,3,4', charset='GREEK'
        ))
        builder.set_common_attributes(_attributes(lineHeight='12', pages='1'))
        builder.add_page_attributes(_attributes(id='0', file='a.png'))
        builder.set_char_count_attributes(_attributes(count='1'))
        builder.add_char_attributes(_attributes(id='65', xadvance='-3', chnl='15'))
        font = builder.build()
        self.assertEqual(font.info.face, 'Test')
        self.assertTrue(font.info.bold)
        self.assertEqual(font.info.padding.left, 4)
        self.assertEqual(str(font.info.charset), 'GREEK')
        self.assertEqual(font.common.line_height, 12)
        self.assertEqual(font.pages, ('a.png',))
        self.assertEqual(font.chars[0].xadvance, -3)

    def test_invalid_key(self):
        with self.assertRaises(InvalidKeyError) as cm:
            FontBuilder().set_info_attributes(_attributes(colour='red'))
        self.assertEqual(cm.exception.key, 'colour')

    def test_duplicate_key(self):
        with self.assertRaises(DuplicateKeyError) as cm:
            FontBuilder().set_info_attributes(_attributes(size='1') + _attributes(size='2'))
        self.assertEqual(cm.exception.key, 'size')
        self.assertEqual(cm.exception.line, 1)

    def test_bad_value(self):
        with self.assertRaises(ParseError) as cm:
            FontBuilder().set_common_attributes(_attributes(lineHeight='70000'))
        self.assertEqual(cm.exception.entity, 'lineHeight')


class TestReferences(BaseTester):

    def test_valid(self):
        self.small.validate_references()

    def test_invalid_page(self):
        builder = FontBuilder()
        builder.set_info(Info())
        builder.set_common(Common())
        builder.add_char(Char(id=65, page=0))
        font = builder.build()
        with self.assertRaises(InvalidCharPageError):
            font.validate_references()

    def test_invalid_kerning(self):
        builder = FontBuilder()
        builder.set_info(Info())
        builder.set_common(Common())
        builder.add_kerning(Kerning(first=65, second=66, amount=1))
        font = builder.build()
        with self.assertRaises(InvalidKerningCharError) as cm:
            font.validate_references()
        self.assertEqual(cm.exception.id, 65)


if __name__ == '__main__':
    unittest.main()
