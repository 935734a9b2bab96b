"""
bmfontkit.storage.magic - descriptor format recognition

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging
from pathlib import Path
from fnmatch import fnmatch

from ..errors import FileFormatError


# number of bytes to read to check if something looks like text
_TEXT_SAMPLE_SIZE = 256
# bytes not expected in text descriptors
_NON_TEXT_BYTES = (
    # C0 controls except HT, LF, CR
    tuple(range(9)) + (11, 12,) + tuple(range(14, 32))
    # also check for F8-FF which shouldn't occur in utf-8 text
    + tuple(range(0xf8, 0x100))
)


def looks_like_text(instream):
    """
    Check if a binary input stream looks a bit like it might hold utf-8 text.
    Currently just checks for unexpected bytes in a short sample.
    """
    if instream.mode == 'w':
        return True
    sample = instream.peek(_TEXT_SAMPLE_SIZE)
    if set(sample) & set(_NON_TEXT_BYTES):
        logging.debug(
            "Found non-text-like bytes: input stream '%s' is likely binary.",
            instream.name
        )
        return False
    try:
        sample.decode('utf-8')
    except UnicodeDecodeError as err:
        # need to ensure we ignore errors due to clipping inside a utf-8 sequence
        if err.reason != 'unexpected end of data':
            logging.debug(
                "Found non-UTF8 sequences: input stream '%s' is likely binary.",
                instream.name
            )
            return False
    logging.debug("Input stream '%s' is likely text.", instream.name)
    return True


class MagicRegistry:
    """Retrieve descriptor converters through magic sequences and name patterns."""

    def __init__(self, default_text='', default_binary=''):
        """Set up registry."""
        self._magic = []
        self._patterns = []
        self._names = {}
        self._default_text = default_text
        self._default_binary = default_binary

    def get_formats(self):
        """Get tuple of all registered format names."""
        return tuple(self._names.keys())

    def __getitem__(self, format):
        """Get converter by format name."""
        try:
            return self._names[format]
        except KeyError:
            raise FileFormatError(
                f'Format specifier `{format}` not recognised.'
            ) from None

    def get_for(self, file=None, format=''):
        """
        Get loader/saver functions for this format, most likely first.
        file must be a Stream or None
        """
        if format:
            return (self[format],)
        converters = self.identify(file)
        if not converters:
            if not file or file.mode == 'w' or looks_like_text(file):
                format = self._default_text
            else:
                format = self._default_binary
            if file and format:
                if Path(file.name).suffix:
                    level = logging.WARNING
                else:
                    level = logging.DEBUG
                logging.log(
                    level,
                    "Could not infer format from file '%s'. "
                    'Falling back to default `%s` format', file.name, format
                )
            if format:
                converters = (self[format],)
        return converters

    def register(self, name='', magic=(), patterns=(), text=False, linked=None):
        """
        Decorator to register converter for descriptor format.

        name: unique name of the format
        magic: magic sequences for this format (no effect for savers)
        patterns: filename patterns for this format
        text: text-based format
        linked: earlier registration to take information from
        """

        def _decorator(converter):
            converter.format = name
            converter.magic = magic
            converter.patterns = patterns
            converter.text = text
            if linked:
                # take from linked registration
                converter.format = converter.format or linked.format
                converter.magic = converter.magic or linked.magic
                converter.patterns = converter.patterns or linked.patterns
                converter.text = converter.text or linked.text
            if not converter.format:
                raise ValueError('No registration name given')
            if converter.format in self._names:
                raise ValueError(
                    f'Registration name `{converter.format}` '
                    f'already in use for {self._names[converter.format]}'
                )
            if not isinstance(converter.magic, (list, tuple)):
                raise TypeError(
                    'Registration parameter `magic` must be list or tuple'
                )
            if not isinstance(converter.patterns, (list, tuple)):
                raise TypeError(
                    'Registration parameter `patterns` must be list or tuple'
                )
            self._names[converter.format] = converter
            for sequence in converter.magic:
                if isinstance(sequence, bytes):
                    sequence = Magic(sequence)
                self._magic.append((sequence, converter))
            # sort the magic registry long to short to manage conflicts
            self._magic = sorted(
                self._magic, key=lambda _i: len(_i[0]), reverse=True
            )
            for pattern in converter.patterns:
                self._patterns.append((Glob(pattern), converter))
            return converter

        return _decorator

    def identify(self, file):
        """Identify a format from magic sequence and filename."""
        if not file:
            return ()
        matches = []
        maybe_text = looks_like_text(file)
        ## match magic on readable files
        if file.mode == 'r':
            for magic, converter in self._magic:
                if magic.fits(file):
                    logging.debug(
                        'Stream matches signature for format `%s`.',
                        converter.format
                    )
                    matches.append(converter)
        ## match glob patterns
        for pattern, converter in self._patterns:
            if pattern.fits(file):
                logging.debug(
                    'Filename matches pattern for format `%s`.',
                    converter.format
                )
                if converter.text and not maybe_text:
                    logging.debug(
                        'but format `%s` requires text.', converter.format
                    )
                elif converter not in matches:
                    matches.append(converter)
        return tuple(matches)


###############################################################################
# signature and filename matchers

class Magic:
    """Match file contents against bytes mask."""

    def __init__(self, value, offset=0):
        """Initialise bytes mask."""
        if not isinstance(value, bytes):
            raise TypeError(
                f'Initialiser must be bytes, not {type(value).__name__}'
            )
        self._offset = offset
        self._value = value

    def __len__(self):
        """Mask length."""
        return self._offset + len(self._value)

    def matches(self, target):
        """Target bytes match the mask."""
        return target[self._offset:len(self)] == self._value

    def fits(self, instream):
        """Binary stream matches the signature."""
        if instream.mode == 'w':
            return False
        return self.matches(instream.peek(len(self)))


class Glob:
    """Match filename against pattern using case-insensitive glob."""

    def __init__(self, pattern):
        """Set up pattern matcher."""
        self._pattern = pattern.lower()

    def matches(self, target):
        """Target string matches the pattern."""
        return fnmatch(str(target).lower(), self._pattern)

    def fits(self, instream):
        """Stream filename matches the pattern."""
        return self.matches(Path(instream.name).name)
