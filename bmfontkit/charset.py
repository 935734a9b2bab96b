"""
bmfontkit.charset - BMFont OEM charset identifiers

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from dataclasses import dataclass

from .base import reverse_dict
from .parse import uint8


# BMFont charset constants seem to be undocumented, but a list is here:
# https://github.com/vladimirgamalyan/fontbm/blob/master/src/FontInfo.cpp
# these are equal to the Windows OEM charset ids
CHARSET_NUM_MAP = {
    'ANSI': 0,
    'DEFAULT': 1,
    'SYMBOL':  2,
    'MAC': 77,
    'SHIFTJIS': 128,
    'HANGUL': 129,
    'JOHAB': 130,
    'GB2312': 134,
    'CHINESEBIG5': 136,
    'GREEK': 161,
    'TURKISH': 162,
    'VIETNAMESE': 163,
    'HEBREW': 177,
    'ARABIC': 178,
    'BALTIC': 186,
    'RUSSIAN': 204,
    'THAI': 222,
    'EASTEUROPE': 238,
    'OEM': 255,
}
CHARSET_NAME_MAP = reverse_dict(CHARSET_NUM_MAP)

ANSI = CHARSET_NUM_MAP['ANSI']


class Charset:
    """
    Charset of a non-unicode font.

    Null: no charset, as used with unicode fonts
    Tagged: an 8-bit charset id
    Undefined: a charset label we could not map to an id
    """

    @staticmethod
    def parse(src):
        """Parse charset from its text representation."""
        if not src:
            return Null()
        try:
            return Tagged(CHARSET_NUM_MAP[src])
        except KeyError:
            pass
        try:
            return Tagged(uint8(src))
        except ValueError:
            return Undefined(src)

    @staticmethod
    def from_byte(byte, unicode=False):
        """Charset from the binary charset byte."""
        if unicode and byte == 0:
            return Null()
        return Tagged(byte)

    def to_byte(self):
        """Binary charset byte."""
        return 0


@dataclass(frozen=True)
class Null(Charset):

    def __str__(self):
        return ''


@dataclass(frozen=True)
class Tagged(Charset):
    value: int

    def __post_init__(self):
        if not 0 <= self.value < 256:
            raise ValueError(f'charset id out of range: {self.value}')

    def __str__(self):
        return CHARSET_NAME_MAP.get(self.value, str(self.value))

    def to_byte(self):
        return self.value


@dataclass(frozen=True)
class Undefined(Charset):
    label: str

    def __str__(self):
        return self.label
