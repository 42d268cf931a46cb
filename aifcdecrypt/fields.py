"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable from a stream.
"""
import logging
import math
import struct

import bitstring

from .codec import format_id, make_id
from .meta import FieldBase
from .streams import Stream


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, optional=False):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        # an optional field takes its default when there is nothing left to read
        self.optional = optional

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    @property
    def raw(self) -> bytes:
        stream = Stream(b'')
        self.pack(stream)

        return stream.getvalue()

    def pack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def get_format(self):
        # everything is big-endian in the AIFF family
        return '>%s' % self.format

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def pack(self, stream):
        stream.write(struct.pack(self.get_format(), self.value))

    def unpack(self, stream):
        self.value = struct.unpack(self.get_format(), stream.read_exact(self.size))[0]


class IdField(StructField):
    """Four characters packed as a big-endian unsigned integer."""

    def __init__(self, default='    ', **kw):
        super().__init__('I', default=make_id(default), **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, format_id(self.value))

    def __str__(self):
        return format_id(self.value)


class PascalStringField(Field):
    """A count byte followed by the text; a pad byte follows when
    the count byte plus the text have odd length."""

    def __init__(self, default=b'', **kw):
        if len(default) > 0xff:
            raise ValueError('a pascal string can hold at most 255 bytes')

        super().__init__(default=default, **kw)

    def _get_size(self):
        length = 1 + len(self.value)
        return length + (length % 2)

    def pack(self, stream):
        length = len(self.value)
        stream.write(bytes([length]) + self.value)

        if (1 + length) % 2:
            stream.write(b'\x00')

    def unpack(self, stream):
        length = stream.read_exact(1)[0]
        self.value = stream.read_exact(length)

        if (1 + length) % 2:
            stream.read_exact(1)


class ExtendedField(Field):
    """
    80-bit IEEE 754 extended precision floating point number, used by the
    AIFF family to store the sample rate:

      | sign (1 bit) | exponent (15 bits) | mantissa (64 bits, explicit integer bit) |

    The raw bytes are kept after unpacking so that the value is packed back
    exactly as it was found.
    """
    BIAS = 16383
    LENGTH = 10

    def __init__(self, default=0.0, **kw):
        self._raw = None
        super().__init__(default=default, **kw)

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = float(value)
        self._raw = None

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        return self.LENGTH

    @classmethod
    def decode(cls, raw: bytes) -> float:
        sign, exponent, mantissa = bitstring.Bits(raw).unpack('uint:1, uint:15, uint:64')

        if exponent == 0 and mantissa == 0:
            value = 0.0
        elif exponent == 0x7fff:
            value = math.inf if mantissa == 0 else math.nan
        else:
            value = math.ldexp(mantissa, exponent - cls.BIAS - 63)

        return -value if sign else value

    @classmethod
    def encode(cls, value: float) -> bytes:
        sign = 1 if math.copysign(1.0, value) < 0 else 0
        value = abs(value)

        if value == 0:
            exponent, mantissa = 0, 0
        elif math.isinf(value):
            exponent, mantissa = 0x7fff, 0
        elif math.isnan(value):
            exponent, mantissa = 0x7fff, 1 << 62
        else:
            fraction, exponent = math.frexp(value)
            # fraction is in [0.5, 1) so the integer bit is always set
            mantissa = int(fraction * (1 << 64))
            exponent += cls.BIAS - 1

        return bitstring.pack('uint:1, uint:15, uint:64', sign, exponent, mantissa).bytes

    def pack(self, stream):
        stream.write(self._raw if self._raw is not None else self.encode(self.value))

    def unpack(self, stream):
        raw = stream.read_exact(self.LENGTH)
        self.value = self.decode(raw)
        self._raw = raw


class BlobField(Field):
    '''Takes as much stream as possible'''

    def __init__(self, default=b'', **kw):
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%d bytes)>' % (self.__class__.__name__, len(self.value))

    def __len__(self):
        return len(self.value)

    def _get_size(self):
        return len(self.value)

    def pack(self, stream):
        stream.write(bytes(self.value))

    def unpack(self, stream):
        self.value = bytearray(stream.read_all())
