"""
bmfontkit.channels - texture channel descriptors

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from enum import IntEnum, IntFlag

from .parse import uint8


class Packing(IntEnum):
    """What a texture channel holds when glyphs are packed into channels."""

    GLYPH = 0
    OUTLINE = 1
    GLYPH_OUTLINE = 2
    ZERO = 3
    ONE = 4

    @classmethod
    def from_byte(cls, byte):
        try:
            return cls(byte)
        except ValueError:
            raise ValueError(f'Packing: invalid u8: {byte}') from None

    @classmethod
    def parse(cls, value):
        return cls.from_byte(uint8(value))


class Chnl(IntFlag):
    """
    Texture channel(s) where a character image is found.

    The format documents BLUE, GREEN, RED, ALPHA and ALL; other 4-bit
    combinations are retained as they are.
    """

    NONE = 0
    BLUE = 1
    GREEN = 2
    RED = 4
    ALPHA = 8
    ALL = 15

    @classmethod
    def from_byte(cls, byte):
        if not 0 <= byte < 0x10:
            raise ValueError(f'Chnl: invalid u8: {byte}')
        return cls(byte)

    @classmethod
    def parse(cls, value):
        return cls.from_byte(uint8(value))

    @property
    def blue(self):
        return bool(self & Chnl.BLUE)

    @property
    def green(self):
        return bool(self & Chnl.GREEN)

    @property
    def red(self):
        return bool(self & Chnl.RED)

    @property
    def alpha(self):
        return bool(self & Chnl.ALPHA)
