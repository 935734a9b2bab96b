"""
bmfontkit test suite
testing utilities
"""

import tempfile
import unittest
import logging
from pathlib import Path

from bmfontkit import (
    Font, Info, Common, Char, Kerning, Padding, Spacing,
    Null, Packing, Chnl,
)


def small_font():
    """Small reference font, as described by the files in tests/fonts."""
    return Font(
        info=Info(
            face='Small Test',
            size=32,
            bold=False,
            italic=False,
            charset=Null(),
            unicode=True,
            stretch_h=100,
            smooth=True,
            aa=4,
            padding=Padding(up=1, right=2, down=3, left=4),
            spacing=Spacing(horizontal=5, vertical=6),
            outline=7,
        ),
        common=Common(
            line_height=32,
            base=24,
            scale_w=1024,
            scale_h=2048,
            pages=1,
            packed=False,
            alpha_chnl=Packing.GLYPH,
            red_chnl=Packing.GLYPH_OUTLINE,
            green_chnl=Packing.ONE,
            blue_chnl=Packing.ZERO,
        ),
        pages=['small_sheet_0.png'],
        chars=[
            Char(
                id=10, x=281, y=9, width=4, height=7,
                xoffset=2, yoffset=24, xadvance=8, page=0, chnl=Chnl.ALL,
            ),
            Char(
                id=32, x=0, y=0, width=7, height=20,
                xoffset=4, yoffset=17, xadvance=9, page=0, chnl=Chnl.RED,
            ),
        ],
        kernings=[
            Kerning(first=10, second=32, amount=-2),
            Kerning(first=32, second=10, amount=1),
        ],
    )


class BaseTester(unittest.TestCase):
    """Base class for testers."""

    logging.basicConfig(level=logging.WARNING)

    font_path = Path('tests/fonts/')

    # fonts are immutable so no problem in creating only once
    small = small_font()

    def setUp(self):
        """Setup ahead of each test."""
        bar = '-' * 20
        logging.debug('%s %s %s', bar, self.id(), bar)
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)

    def tearDown(self):
        """Clean up after each test."""
        self.temp_dir.cleanup()

    def read_fixture(self, name):
        """Bytes of a file in tests/fonts."""
        return (self.font_path / name).read_bytes()
