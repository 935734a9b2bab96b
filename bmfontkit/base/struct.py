"""
bmfontkit.base.struct - binary structures

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import ctypes
from types import SimpleNamespace


class StructError(ValueError):
    """Binary structure could not be read or written."""

    def __init__(self, message, field=None, value=None):
        super().__init__(message)
        self.field = field
        self.value = value


##############################################################################
# binary structs


# type strings
TYPES = {
    'uint8': ctypes.c_uint8,
    'uint16': ctypes.c_uint16,
    'int16': ctypes.c_int16,
    'uint32': ctypes.c_uint32,
}

_SIGNED = (ctypes.c_int16,)
_UNSIGNED = (ctypes.c_uint8, ctypes.c_uint16, ctypes.c_uint32)


def _parse_type(atype):
    """Convert struct member type specification to ctypes base type or char array."""
    try:
        return TYPES[atype]
    except KeyError:
        pass
    if atype.endswith('s'):
        return ctypes.c_char * int(atype[:-1])
    raise ValueError('Field type `{}` not understood'.format(atype))


def _int_range(ctype):
    """Inclusive (min, max) for an integer ctype; None for other types."""
    bits = 8 * ctypes.sizeof(ctype)
    if ctype in _UNSIGNED:
        return 0, (1 << bits) - 1
    if ctype in _SIGNED:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return None


class _WrappedCValue:
    """Wrapper for ctypes value."""

    @classmethod
    def from_cvalue(cls, cvalue, type):
        obj = cls()
        obj._cvalue = cvalue
        obj._type = type
        return obj

    def __bytes__(self):
        return bytes(self._cvalue)


class _WrappedCType:
    """Wrapper for ctypes type, factory for _WrappedCValue objects."""

    def __mul__(self, count):
        """Create an array."""
        return ArrayType(self, count)

    def from_cvalue(self, cvalue):
        """Instantiate a struct variable from a cvalue."""
        # pylint: disable=no-member
        return self._value_cls.from_cvalue(cvalue, self)

    def from_bytes(self, data, offset=0):
        """Instantiate a struct variable from a copy of a buffer."""
        # pylint: disable=no-member
        try:
            cvalue = self._ctype.from_buffer_copy(data, offset)
        except ValueError as e:
            raise StructError(str(e)) from e
        return self.from_cvalue(cvalue)

    @property
    def size(self):
        # pylint: disable=no-member
        return ctypes.sizeof(self._ctype)


class StructValue(_WrappedCValue):
    """Wrapper for ctypes Structure."""

    def __getattr__(self, attr):
        if not attr.startswith('_'):
            return getattr(self._cvalue, attr)
        raise AttributeError(attr)


class StructType(_WrappedCType):
    """
    Represent a little-endian structured type.

    mystruct = StructType(first='uint8', second='uint16')
    s = mystruct(first=1, second=2)

    assert bytes(s) == b'\1\2\0'
    assert mystruct.from_bytes(b'\1\2\0').second == 2
    """

    _value_cls = StructValue

    def __init__(self, **description):
        """Create a structured type."""
        fields = tuple(
            (_field, _parse_type(_type))
            for _field, _type in description.items()
        )

        class _CStruct(ctypes.LittleEndianStructure):
            _fields_ = fields
            _layout_ = 'ms'
            _pack_ = 1

        self._ctype = _CStruct
        self._ranges = {
            _field: _int_range(_ctype) for _field, _ctype in fields
        }

    def __call__(self, **kwargs):
        """Instantiate a struct variable; integer fields are range-checked."""
        for field, value in kwargs.items():
            try:
                bounds = self._ranges[field]
            except KeyError:
                raise StructError(f'no field `{field}`', field, value) from None
            if bounds and not bounds[0] <= value <= bounds[1]:
                raise StructError(
                    f'`{field}` value {value} out of range {bounds[0]}..{bounds[1]}',
                    field, value
                )
        try:
            cvalue = self._ctype(**kwargs)
        except (TypeError, ValueError) as e:
            raise StructError(str(e)) from e
        return self.from_cvalue(cvalue)


class ArrayValue(_WrappedCValue):
    """Wrapper for ctypes arrays of structures."""

    def __getitem__(self, item):
        return self._cvalue[item]

    def __iter__(self):
        return (self[_i] for _i in range(len(self)))

    def __len__(self):
        return len(self._cvalue)


class ArrayType(_WrappedCType):
    """Wrapper for ctypes array type."""

    _value_cls = ArrayValue

    def __init__(self, struct, count):
        self._ctype = struct._ctype * count


little_endian = SimpleNamespace(
    Struct=StructType,
)
