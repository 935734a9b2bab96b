"""
bmfontkit.tagged - tagged-attribute line tokenizer

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from collections import namedtuple

from .errors import (
    BadNewlineError, ExpectedEqualsError,
    UnexpectedEndOfLineError, UnexpectedEndOfFileError,
)


# Data is encoded as lines of tagged attributes, e.g.
#
#   page id=0 file="bitmap_0.tga"
#   chars count=347
#
# Line      := Tag Attribute* EOL | EOL
# Attribute := Key WS* '=' WS* Value
# Value     := unquoted run | '"' run without '"' or EOL '"'
# EOL       := CR LF | LF
# WS        := space | tab

_CR = ord('\r')
_LF = ord('\n')
_EQ = ord('=')
_QT = ord('"')
_SP = ord(' ')
_TB = ord('\t')
_WHITESPACE = (_SP, _TB)


Tag = namedtuple('Tag', 'tag line')
Attribute = namedtuple('Attribute', 'key value line')


class TaggedAttributes:
    """Pull tokenizer over tagged-attribute bytes."""

    def __init__(self, data):
        self._data = bytes(data)
        self._index = 0
        self._entity = ''
        # 1-based line number
        self.line = 1

    def next_tag(self):
        """Get the next Tag, skipping empty lines; None at end of data."""
        self._entity = 'tags'
        data = self._data
        while True:
            byte = self._skip()
            if byte is None:
                return None
            if byte == _CR:
                self._crlf(consume=True)
                self.line += 1
            elif byte == _LF:
                self._index += 1
                self.line += 1
            else:
                head = self._index
                self._index += 1
                tail = self._unquoted_tail()
                return Tag(data[head:tail], self.line)

    def next_attribute(self):
        """Get the next Attribute on the current line; None at end of line."""
        self._entity = 'attributes'
        data = self._data
        byte = self._skip()
        if byte is None:
            return None
        # the end of line stays put, the next tag moves past it
        if byte == _CR:
            self._crlf(consume=False)
            return None
        if byte == _LF:
            return None
        key_head = self._index
        self._index += 1
        key_tail = self._key_tail()
        byte = self._skip()
        if byte is None or byte in (_CR, _LF):
            self._fail(UnexpectedEndOfLineError)
        value_head = self._index
        self._index += 1
        if byte == _QT:
            value_head += 1
            value_tail = self._quoted_tail()
        else:
            value_tail = self._unquoted_tail()
        return Attribute(data[key_head:key_tail], data[value_head:value_tail], self.line)

    def iter_attributes(self):
        """Iterate over the attributes on the current line."""
        while True:
            attribute = self.next_attribute()
            if attribute is None:
                return
            yield attribute

    def _fail(self, error_cls):
        raise error_cls(entity=self._entity, line=self.line)

    def _peek(self):
        if self._index < len(self._data):
            return self._data[self._index]
        return None

    def _skip(self):
        """Skip whitespace, return the next byte without consuming it."""
        byte = self._peek()
        while byte in _WHITESPACE:
            self._index += 1
            byte = self._peek()
        return byte

    def _crlf(self, consume):
        """Check for LF after CR; optionally move past it."""
        self._index += 1
        if self._peek() != _LF:
            self._fail(BadNewlineError)
        if consume:
            self._index += 1

    def _key_tail(self):
        """Find the end of a key and move past the equals sign."""
        while True:
            byte = self._peek()
            if byte is None:
                self._fail(UnexpectedEndOfFileError)
            if byte > _SP:
                if byte == _EQ:
                    index = self._index
                    self._index += 1
                    return index
            elif byte in (_CR, _LF):
                self._fail(UnexpectedEndOfLineError)
            elif byte in _WHITESPACE:
                index = self._index
                self._index += 1
                # only whitespace may separate key and equals sign
                while True:
                    byte = self._peek()
                    if byte is None:
                        break
                    self._index += 1
                    if byte == _EQ:
                        return index
                    if byte not in _WHITESPACE:
                        break
                self._fail(ExpectedEqualsError)
            self._index += 1

    def _unquoted_tail(self):
        """Find the end of an unquoted run; consume one trailing whitespace."""
        while True:
            byte = self._peek()
            if byte is None:
                return self._index
            if byte == _CR:
                index = self._index
                self._crlf(consume=False)
                return index
            if byte == _LF:
                return self._index
            if byte in _WHITESPACE:
                index = self._index
                self._index += 1
                return index
            self._index += 1

    def _quoted_tail(self):
        """Find the closing quote and move past it."""
        while True:
            byte = self._peek()
            if byte is None:
                self._fail(UnexpectedEndOfFileError)
            if byte in (_CR, _LF):
                self._fail(UnexpectedEndOfLineError)
            if byte == _QT:
                index = self._index
                self._index += 1
                return index
            self._index += 1
