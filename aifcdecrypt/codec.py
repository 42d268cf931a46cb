'''
Primitive big-endian codec.

An identifier is the 32-bit big-endian value of four ASCII characters,
so it's a plain int and comparing two of them is cheap.
'''
import struct


def make_id(chars: str) -> int:
    if len(chars) != 4:
        raise ValueError(f'an identifier is made of exactly 4 characters, not {chars!r}')

    return struct.unpack('>I', chars.encode('latin1'))[0]


def format_id(identifier: int) -> str:
    return struct.pack('>I', identifier).decode('latin1')


def read_id(stream) -> int:
    return struct.unpack('>I', stream.read_exact(4))[0]


def read_int32(stream) -> int:
    return struct.unpack('>i', stream.read_exact(4))[0]


def write_id(stream, identifier: int) -> None:
    stream.write(struct.pack('>I', identifier))


def write_int32(stream, value: int) -> None:
    stream.write(struct.pack('>i', value))


FORM = make_id('FORM')
AIFC = make_id('AIFC')
AIFF = make_id('AIFF')
NONE = make_id('NONE')
# compression type of the encrypted sound data
ABLE = make_id('able')
