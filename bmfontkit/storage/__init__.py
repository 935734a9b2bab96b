"""
bmfontkit.storage - recognise descriptor files, load and save fonts

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .base import loaders, savers
from .fontfiles import load, save
from .magic import Glob, Magic, looks_like_text
from .streams import Stream, get_bytesio


# ensure format plugins get registered
from .. import formats as _formats
