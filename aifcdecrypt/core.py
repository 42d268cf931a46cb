"""
Core module for the abstraction of a chunk based file format

"""
from typing import Tuple, List

from .codec import format_id, write_id, write_int32
from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import (
    MalformedChunk,
    TruncatedRead,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: a chunk is identified
    by the class attribute ID and its body is made of the fields declared in the class,
    in declaration order.

    A Chunk can contain sub-chunks.

    On disk a chunk is the identifier, the size of the body as a big-endian signed
    32-bit integer, the body and a pad byte when the size is odd.
    """
    ID = None

    def get_id(self) -> int:
        return self.ID

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = '%s\n' % format_id(self.ID) if self.ID is not None else ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_size(self):
        '''the size MUST be derived from the fields'''
        size = 0
        for _, field in self.get_fields():
            size += field.size

        return size

    def validate(self) -> bool:
        '''Override to check the unpacked values make sense.'''
        return True

    def pack(self, stream):
        '''Writes the body of the chunk, i.e. all its fields.'''
        for field_name, field in self.get_fields():
            self.logger.debug('packing %s.%s' % (self.__class__.__name__, field_name))
            field.pack(stream)

    def unpack(self, stream):
        for field_name, field in self.get_fields():
            if field.optional and stream.remaining() == 0:
                self.logger.debug('%s.%s not present, using default' % (self.__class__.__name__, field_name))
                field.init()
            else:
                self.logger.debug('unpacking %s.%s at offset %d' % (self.__class__.__name__, field_name, stream.tell()))
                try:
                    field.unpack(stream)
                except (TruncatedRead, MalformedChunk) as e:
                    e.chain.append(field_name)
                    raise

    def read_data(self, stream, start: int, size: int):
        '''Parse the body of this chunk that lives in [start, start + size).

        The fields are unpacked from a stream containing only these bytes so
        that nothing outside the declared region can be consumed.'''
        stream.seek(start)
        body = Stream(stream.read_exact(size))

        try:
            self.unpack(body)
        except TruncatedRead as e:
            raise MalformedChunk(
                "chunk '%s' of %d bytes is too short for its layout" % (format_id(self.ID), size),
                chain=e.chain) from e

        left = body.remaining()
        if left:
            raise MalformedChunk("chunk '%s' has %d unexpected trailing bytes" % (format_id(self.ID), left))

        if not self.validate():
            raise MalformedChunk("chunk '%s' contains invalid values" % format_id(self.ID))

    def write(self, stream):
        body = self.raw
        size = len(body)

        write_id(stream, self.get_id())
        write_int32(stream, size)
        stream.write(body)

        if size % 2:
            stream.write(b'\x00')
