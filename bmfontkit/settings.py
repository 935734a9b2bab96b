"""
bmfontkit.settings - load settings

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class LoadSettings:
    """
    Relax the checks applied when building a font.

    ignore_counts: do not check declared char, kerning and page counts
    allow_string_control_characters: accept control characters in face and page names
    ignore_invalid_tags: skip unrecognised tags and elements instead of failing
    """
    ignore_counts: bool = False
    allow_string_control_characters: bool = False
    ignore_invalid_tags: bool = False

    @classmethod
    def create(cls, settings=None, **kwargs):
        """Settings object from an existing one and/or keyword overrides."""
        if settings is None:
            settings = cls()
        if kwargs:
            settings = replace(settings, **kwargs)
        return settings


DEFAULT_SETTINGS = LoadSettings()
