"""
bmfontkit.base - supporting classes

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from . import struct
from . import binary


def reverse_dict(orig_dict):
    """Reverse a dict."""
    return {_v: _k for _k, _v in orig_dict.items()}
