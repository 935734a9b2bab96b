"""
bmfontkit.storage.base - converter registries

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .magic import MagicRegistry

DEFAULT_TEXT_FORMAT = 'text'
DEFAULT_BINARY_FORMAT = 'binary'

loaders = MagicRegistry(DEFAULT_TEXT_FORMAT, DEFAULT_BINARY_FORMAT)
savers = MagicRegistry(DEFAULT_TEXT_FORMAT)
