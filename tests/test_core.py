import pytest

from aifcdecrypt.codec import make_id
from aifcdecrypt.core import Chunk
from aifcdecrypt.exceptions import MalformedChunk, TruncatedRead
from aifcdecrypt.fields import StructField, PascalStringField, BlobField, IdField
from aifcdecrypt.meta import Meta
from aifcdecrypt.streams import Stream


class Dummy(Chunk):
    ID = make_id('DUMY')

    a = StructField('I', default=0xbad)
    b = PascalStringField(default=b'ABC')
    c = StructField('H', default=0xbeef)


class Tail(Chunk):
    ID = make_id('TAIL')

    kind = IdField(default='NONE', optional=True)


class Positive(Chunk):
    ID = make_id('POSI')

    number = StructField('i')

    def validate(self):
        return self.number.value > 0


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    dummy = Dummy()

    assert isinstance(dummy._meta, Meta)
    assert dummy.get_ordered_fields_name() == ['a', 'b', 'c']
    assert dummy.a.father is dummy
    assert dummy.get_id() == make_id('DUMY')

    assert dummy.size == 4 + 4 + 2
    assert dummy.raw == b'\x00\x00\x0b\xad' + b'\x03ABC' + b'\xbe\xef'


def test_fields_are_not_shared():
    first, second = Dummy(), Dummy()

    first.a.value = 1

    assert second.a.value == 0xbad
    assert first.a is not second.a


def test_inheritance():
    '''subclasses inherit fields'''
    class Son(Dummy):
        d = StructField('B')

    son = Son()
    son.read_data(Stream(b'\x01\x02\x03\x04\x03ABC\x00\x01X'), 0, 11)

    assert son.get_ordered_fields_name() == ['a', 'b', 'c', 'd']
    assert son.a.value == 0x01020304
    assert son.b.value == b'ABC'
    assert son.d.value == 0x58


def test_chunk_as_field():
    class Container(Chunk):
        dummy = Dummy()
        extra = StructField('B')

    container = Container()

    assert container.dummy.father is container
    assert container.size == 10 + 1


def test_read_data_is_bounded():
    class Greedy(Chunk):
        ID = make_id('GRDY')

        data = BlobField()

    stream = Stream(b'XXXX' + b'\x01\x02\x03' + b'YYYY')

    greedy = Greedy()
    greedy.read_data(stream, 4, 3)

    assert greedy.data.value == b'\x01\x02\x03'
    assert stream.tell() == 7


def test_read_data_at_offset():
    dummy = Dummy()
    stream = Stream(b'\xff' * 2 + b'\x00\x00\x00\x01\x03ABC\x00\x02' + b'\xff')

    dummy.read_data(stream, 2, 10)

    assert dummy.a.value == 1
    assert dummy.b.value == b'ABC'
    assert dummy.c.value == 2
    assert stream.tell() == 12


def test_read_data_too_short():
    dummy = Dummy()

    with pytest.raises(MalformedChunk) as e:
        dummy.read_data(Stream(b'\x00\x00\x00\x01\x03ABC\x00\x02'), 0, 9)

    assert e.value.chain == ['c']


def test_read_data_trailing_bytes():
    dummy = Dummy()

    with pytest.raises(MalformedChunk):
        dummy.read_data(Stream(b'\x00\x00\x00\x01\x03ABC\x00\x02\x00'), 0, 11)


def test_read_data_past_end_of_stream():
    dummy = Dummy()

    with pytest.raises(TruncatedRead):
        dummy.read_data(Stream(b'\x00\x00\x00\x01'), 0, 10)


def test_read_data_validate():
    positive = Positive()
    positive.read_data(Stream(b'\x00\x00\x00\x01'), 0, 4)

    assert positive.number.value == 1

    with pytest.raises(MalformedChunk):
        positive.read_data(Stream(b'\xff\xff\xff\xff'), 0, 4)


def test_optional_field():
    tail = Tail()
    tail.read_data(Stream(b'able'), 0, 4)

    assert str(tail.kind) == 'able'

    tail.read_data(Stream(b''), 0, 0)

    assert str(tail.kind) == 'NONE'


def test_write():
    dummy = Dummy()
    stream = Stream(b'')

    dummy.write(stream)

    assert stream.getvalue() == b'DUMY\x00\x00\x00\x0a' + dummy.raw

    class Odd(Chunk):
        ID = make_id('ODD ')

        number = StructField('B', default=0x7)

    stream = Stream(b'')

    Odd().write(stream)

    # the size doesn't count the pad byte
    assert stream.getvalue() == b'ODD \x00\x00\x00\x01\x07\x00'

    tail = Tail()
    stream = Stream(b'')

    tail.write(stream)

    assert stream.getvalue() == b'TAIL\x00\x00\x00\x04NONE'
