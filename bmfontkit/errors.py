"""
bmfontkit.errors - descriptor errors

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""


class BMFontError(ValueError):
    """Base class for all descriptor errors."""

    def __init__(self, message='', *, line=None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self):
        if self.line is not None:
            return f'line {self.line}: {self.message}'
        return self.message


class FileFormatError(BMFontError):
    """Storage-level problem, e.g. unknown format name."""


class InternalError(BMFontError):
    """Misuse of an internal object."""


##############################################################################
# structure

class StructureError(BMFontError):
    """Descriptor blocks are missing, repeated or out of order."""


class NoInfoBlockError(StructureError):

    def __init__(self, line=None):
        super().__init__('no info block', line=line)


class NoCommonBlockError(StructureError):

    def __init__(self, line=None):
        super().__init__('no common block', line=line)


class DuplicateInfoBlockError(StructureError):

    def __init__(self, line=None):
        super().__init__('duplicate info block', line=line)


class DuplicateCommonBlockError(StructureError):

    def __init__(self, line=None):
        super().__init__('duplicate common block', line=line)


class DuplicateCharCountError(StructureError):

    def __init__(self, line=None):
        super().__init__('duplicate char count', line=line)


class DuplicateKerningCountError(StructureError):

    def __init__(self, line=None):
        super().__init__('duplicate kerning count', line=line)


class BrokenPageListError(StructureError):

    def __init__(self, id, expected, line=None):
        super().__init__(
            f'broken page list: page id {id}, expected {expected}', line=line
        )
        self.id = id
        self.expected = expected


class InvalidTagError(StructureError):

    def __init__(self, tag, line=None):
        super().__init__(f'invalid tag: {tag}', line=line)
        self.tag = tag


class InvalidKeyError(StructureError):

    def __init__(self, key, line=None):
        super().__init__(f'invalid key: {key}', line=line)
        self.key = key


class DuplicateKeyError(StructureError):

    def __init__(self, key, line=None):
        super().__init__(f'duplicate key: {key}', line=line)
        self.key = key


##############################################################################
# counts

class CountError(BMFontError):
    """Declared count disagrees with the number of entries found."""

    entity = ''

    def __init__(self, specified, realized, line=None):
        super().__init__(
            f'invalid {self.entity} count: specified {specified}, realized {realized}',
            line=line
        )
        self.specified = specified
        self.realized = realized


class InvalidCharCountError(CountError):
    entity = 'char'


class InvalidKerningCountError(CountError):
    entity = 'kerning'


class InvalidPageCountError(CountError):
    entity = 'page'


##############################################################################
# references

class IntegrityError(BMFontError):
    """Cross-references within the font do not resolve."""


class InvalidCharPageError(IntegrityError):

    def __init__(self, char_id, page_id):
        super().__init__(f'char {char_id}: invalid page reference {page_id}')
        self.char_id = char_id
        self.page_id = page_id


class InvalidKerningCharError(IntegrityError):

    def __init__(self, id):
        super().__init__(f'kerning: invalid char reference {id}')
        self.id = id


##############################################################################
# encoding

class EncodingError(BMFontError):
    """Data cannot be represented in, or recovered from, an encoding."""


class UnsafeValueStringError(EncodingError):

    def __init__(self, path, value):
        super().__init__(f'{path}: unsafe value string: {value!r}')
        self.path = path
        self.value = value


class UnsupportedValueEncodingError(EncodingError):

    def __init__(self, path, value):
        super().__init__(f'{path}: unsupported value encoding: {value!r}')
        self.path = path
        self.value = value


class InvalidBinaryError(EncodingError):

    def __init__(self, magic):
        super().__init__(f'invalid binary: magic bytes {bytes(magic)!r}')
        self.magic = bytes(magic)


class InvalidBinaryBlockError(EncodingError):

    def __init__(self, id):
        super().__init__(f'invalid binary block id: {id}')
        self.id = id


class UnsupportedBinaryVersionError(EncodingError):

    def __init__(self, version):
        super().__init__(f'unsupported binary version: {version}')
        self.version = version


class InvalidBinaryEncodingError(EncodingError):

    def __init__(self, unicode, charset):
        super().__init__(
            f'invalid binary encoding: unicode={int(unicode)} charset={charset!r}'
        )
        self.unicode = unicode
        self.charset = charset


class IncongruentPageNameLenError(EncodingError):

    def __init__(self, line=None):
        super().__init__('page names must share one length', line=line)


class EmbeddedNulError(EncodingError):

    def __init__(self, path, value):
        super().__init__(f'{path}: embedded NUL in {value!r}')
        self.path = path
        self.value = value


class ValueRangeError(EncodingError):

    def __init__(self, field, value):
        super().__init__(f'{field}: value {value} out of range')
        self.field = field
        self.value = value


class BufferUnderflowError(EncodingError):

    def __init__(self, entity='buffer'):
        super().__init__(f'{entity}: underflow')
        self.entity = entity


class BufferOverflowError(EncodingError):

    def __init__(self, entity='buffer'):
        super().__init__(f'{entity}: overflow')
        self.entity = entity


##############################################################################
# parsing

class ParseError(BMFontError):
    """Malformed input at a given entity."""

    def __init__(self, message, entity='', line=None):
        if entity:
            message = f'{entity}: {message}'
        super().__init__(message, line=line)
        self.entity = entity


class GrammarError(ParseError):
    """Tagged-attribute text violates the line grammar."""

    reason = ''

    def __init__(self, entity='', line=None):
        super().__init__(self.reason, entity=entity, line=line)


class BadNewlineError(GrammarError):
    reason = 'bad new line'


class ExpectedEqualsError(GrammarError):
    reason = "expected '='"


class UnexpectedEndOfLineError(GrammarError):
    reason = 'unexpected end of line'


class UnexpectedEndOfFileError(GrammarError):
    reason = 'unexpected end of file'
