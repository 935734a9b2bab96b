"""
bmfontkit.font - BMFont descriptor model

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from collections import namedtuple
from dataclasses import dataclass

from .charset import Charset, Tagged, ANSI
from .channels import Packing, Chnl
from .errors import InvalidCharPageError, InvalidKerningCharError


# > padding     The padding for each character (up, right, down, left).
Padding = namedtuple('Padding', 'up right down left', defaults=(0, 0, 0, 0))

# > spacing     The spacing for each character (horizontal, vertical).
Spacing = namedtuple('Spacing', 'horizontal vertical', defaults=(0, 0))


@dataclass(frozen=True)
class Info:
    """
    How the font was generated.

    face: name of the true type font
    size: size of the true type font
    bold: the font is bold
    italic: the font is italic
    charset: OEM charset used, when not unicode
    unicode: the font uses the unicode charset
    stretch_h: font height stretch in percentage, 100 means no stretch
    smooth: smoothing was turned on
    aa: supersampling level used, 1 means no supersampling
    padding: padding for each character
    spacing: spacing for each character
    outline: outline thickness for the characters
    """
    face: str = ''
    size: int = 0
    bold: bool = False
    italic: bool = False
    charset: Charset = Tagged(ANSI)
    unicode: bool = False
    stretch_h: int = 0
    smooth: bool = False
    aa: int = 0
    padding: Padding = Padding()
    spacing: Spacing = Spacing()
    outline: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'padding', Padding(*self.padding))
        object.__setattr__(self, 'spacing', Spacing(*self.spacing))


@dataclass(frozen=True)
class Common:
    """
    Information common to all characters.

    line_height: distance in pixels between each line of text
    base: pixels from the top of the line to the base of the characters
    scale_w: width of the texture
    scale_h: height of the texture
    pages: number of texture pages
    packed: monochrome characters have been packed into each of the texture channels
    alpha_chnl, red_chnl, green_chnl, blue_chnl: what each channel holds
    """
    line_height: int = 0
    base: int = 0
    scale_w: int = 0
    scale_h: int = 0
    pages: int = 0
    packed: bool = False
    alpha_chnl: Packing = Packing.GLYPH
    red_chnl: Packing = Packing.GLYPH
    green_chnl: Packing = Packing.GLYPH
    blue_chnl: Packing = Packing.GLYPH


@dataclass(frozen=True)
class Page:
    """Texture page, as supplied to the builder."""
    id: int = 0
    file: str = ''


@dataclass(frozen=True)
class Char:
    """Character image location in the texture, and its placement."""
    id: int = 0
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    xoffset: int = 0
    yoffset: int = 0
    xadvance: int = 0
    page: int = 0
    chnl: Chnl = Chnl.ALL


@dataclass(frozen=True)
class Kerning:
    """Adjustment of the x position when `second` immediately follows `first`."""
    first: int = 0
    second: int = 0
    amount: int = 0


@dataclass(frozen=True)
class Font:
    """BMFont descriptor."""
    info: Info = Info()
    common: Common = Common()
    pages: tuple = ()
    chars: tuple = ()
    kernings: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, 'pages', tuple(self.pages))
        object.__setattr__(self, 'chars', tuple(self.chars))
        object.__setattr__(self, 'kernings', tuple(self.kernings))

    def validate_references(self):
        """Ensure all page and character references exist."""
        for char in self.chars:
            if char.page >= len(self.pages):
                raise InvalidCharPageError(char.id, char.page)
        ids = set(_char.id for _char in self.chars)
        for kerning in self.kernings:
            if kerning.first not in ids:
                raise InvalidKerningCharError(kerning.first)
            if kerning.second not in ids:
                raise InvalidKerningCharError(kerning.second)
