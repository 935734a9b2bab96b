"""
bmfontkit.render - render text from a font and its texture pages

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from pathlib import Path

try:
    from PIL import Image
except ImportError:
    Image = None


def load_pages(font, folder='.'):
    """Open the font's texture pages as 8-bit greyscale images."""
    if not Image:
        raise ImportError('Rendering to image requires PIL module.')
    folder = Path(folder)
    pages = []
    for page in font.pages:
        with Image.open(folder / page) as img:
            pages.append(img.convert('L'))
    return pages


class RenderFont:
    """Font indexed for rendering."""

    def __init__(self, font, pages):
        """
        Index chars by id and kernings by pair.

        font: Font with valid page and char references
        pages: texture page images, in page id order
        """
        font.validate_references()
        self.common = font.common
        self.pages = list(pages)
        if len(self.pages) < len(font.pages):
            raise ValueError(
                f'Font has {len(font.pages)} pages, {len(self.pages)} images given.'
            )
        self.chars = {_char.id: _char for _char in font.chars}
        self.kernings = {
            (_kern.first, _kern.second): _kern.amount
            for _kern in font.kernings
        }


class RenderSurface:
    """Greyscale canvas with a text cursor."""

    def __init__(self, width, height):
        if not Image:
            raise ImportError('Rendering to image requires PIL module.')
        self._image = Image.new('L', (width, height))
        self.x, self.y = 0, 0
        self._last = None

    @property
    def image(self):
        return self._image

    def save(self, path):
        self._image.save(path)

    def println(self, render_font, text=''):
        """Print text and move the cursor to the start of the next line."""
        self.print(render_font, text)
        self.x = 0
        self.y += render_font.common.line_height
        self._last = None

    def print(self, render_font, text):
        for character in text:
            self.print_character(render_font, character)

    def print_character(self, render_font, character):
        """Copy one character image to the cursor and advance."""
        char_id = ord(character)
        try:
            char = render_font.chars[char_id]
        except KeyError:
            logging.warning('Cannot render character: %08X', char_id)
            return
        dst = (self.x + char.xoffset, self.y + char.yoffset)
        self.x += char.xadvance
        if self._last is not None:
            self.x += render_font.kernings.get((self._last, char_id), 0)
        self._last = char_id
        if not char.width or not char.height:
            return
        src = render_font.pages[char.page].crop((
            char.x, char.y, char.x + char.width, char.y + char.height
        ))
        # paste clips to the surface
        self._image.paste(src, dst)


def render_text(font, pages, lines, size):
    """Render lines of text to a new greyscale image of the given size."""
    render_font = RenderFont(font, pages)
    surface = RenderSurface(*size)
    for line in lines:
        surface.println(render_font, line)
    return surface.image
