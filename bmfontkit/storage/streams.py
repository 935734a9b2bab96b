"""
bmfontkit.storage.streams - descriptor stream tools

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import io
import logging
from pathlib import Path


def get_bytesio(bytestring):
    """Workaround as our streams objects require a buffer."""
    return io.BufferedReader(io.BytesIO(bytestring))


class Stream:
    """Binary stream wrapper with a name and a single r/w mode."""

    def __init__(self, file, mode, *, name=''):
        """
        Ensure file is a binary stream, wrap if necessary.

        file: stream or file-like object, or bytes when reading
        mode: 'r' or 'w'
        """
        mode = mode[:1]
        if isinstance(file, (str, Path)):
            raise ValueError(
                'Argument `file` must be a Python file or stream-like object.'
            )
        if isinstance(file, (bytes, bytearray, memoryview)):
            if mode != 'r':
                raise ValueError('Cannot write to a bytes object.')
            file = get_bytesio(bytes(file))
        self._stream = file
        self.mode = mode
        self.name = name or get_name(file)
        self._ensure_rw()
        self._ensure_binary()
        if mode == 'r' and not hasattr(self._stream, 'peek'):
            # we need to look ahead to identify formats - drain to buffer
            self._stream = get_bytesio(self._stream.read())

    def __repr__(self):
        """String representation."""
        return f"<{type(self).__name__} name='{self.name}' mode='{self.mode}'>"

    def _ensure_rw(self):
        """Ensure r/w mode is consistent."""
        if self.mode == 'r' and not self._stream.readable():
            raise ValueError('Expected readable stream, got writable.')
        if self.mode == 'w' and not self._stream.writable():
            raise ValueError('Expected writable stream, got readable.')

    def _ensure_binary(self):
        """Ensure we have a binary stream."""
        # a text format can be read from/written to a binary stream
        if not is_binary(self._stream):
            textstream = self._stream
            try:
                self._stream = self._stream.buffer
            except AttributeError:
                if self.mode != 'r':
                    raise ValueError('Unable to access binary stream.') from None
                # e.g. StringIO
                self._stream = get_bytesio(textstream.read().encode('utf-8'))
            else:
                if self.mode == 'w':
                    textstream.flush()
            logging.debug(
                'Getting buffer %r from text stream %r.', self._stream, textstream
            )

    def peek(self, size):
        """Look ahead without consuming; returns at most `size` bytes."""
        return self._stream.peek(size)[:size]

    def read(self, size=-1):
        return self._stream.read(size)

    def write(self, data):
        return self._stream.write(data)

    def flush(self):
        self._stream.flush()


def is_binary(stream):
    """Check if stream is binary."""
    if stream.readable():
        # read 0 bytes - the return type will tell us if this is a text or binary stream
        return isinstance(stream.read(0), bytes)
    # write empty bytes - error if text stream
    try:
        stream.write(b'')
    except TypeError:
        return False
    return True


def get_name(stream):
    """Get stream name, if available."""
    try:
        name = stream.name
    except AttributeError:
        # not all streams have one (e.g. BytesIO)
        return ''
    # file descriptors have integer names
    if not isinstance(name, str):
        return ''
    return name
