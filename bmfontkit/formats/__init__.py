"""
bmfontkit.formats - BMFont descriptor codecs

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from . import binary, text, xml, json
