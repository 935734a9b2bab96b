"""
bmfontkit - read and write BMFont bitmap font descriptors

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import sys as _sys
assert _sys.version_info >= (3, 9)

from .constants import VERSION as __version__
from .font import Font, Info, Common, Page, Char, Kerning, Padding, Spacing
from .charset import Charset, Null, Tagged, Undefined
from .channels import Packing, Chnl
from .settings import LoadSettings
from .builder import FontBuilder
from .errors import *
from .storage import load, save, loaders, savers
from .formats import binary, text, xml, json
