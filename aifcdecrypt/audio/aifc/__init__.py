'''
# Audio Interchange File Format

AIFF and its extension AIFC store sound data as a FORM chunk containing
a form type and a sequence of sub-chunks; every length is big-endian.

The specification is at <http://www-mmsp.ece.mcgill.ca/Documents/AudioFormats/AIFF/Docs/AIFF-C.9.26.91.pdf>.

Some tools write AIFC files whose sound data is encrypted: the COMM chunk
declares the compression type 'able' and an extra 'Able' chunk carries
the key. Here we parse such a file, decrypt the sound data and write back
a plain AIFC with compression type 'NONE'.
'''
import logging
from typing import Dict, Set

from aifcdecrypt import cipher, fields
from aifcdecrypt.codec import (
    make_id,
    format_id,
    read_id,
    read_int32,
    write_id,
    write_int32,
    FORM,
    AIFC,
    AIFF,
    NONE,
    ABLE,
)
from aifcdecrypt.core import Chunk
from aifcdecrypt.enum import FormPhase
from aifcdecrypt.exceptions import (
    AIFCDecryptException,
    NotAnAIFCFile,
    UnsupportedFormType,
    ChunkBoundsViolation,
    UnsupportedCompression,
    MissingChunk,
)
from aifcdecrypt.streams import Stream


logger = logging.getLogger(__name__)

# AIFC Version 1
AIFC_VERSION1 = 0xa2805140
NOT_COMPRESSED = b'not compressed'


class FormatVersionChunk(Chunk):
    ID = make_id('FVER')

    timestamp = fields.StructField('I', default=AIFC_VERSION1)


class AbleChunk(Chunk):
    '''Whatever is inside the chunk is the key used to encrypt the sound data.'''
    ID = make_id('Able')

    key = fields.BlobField()

    def validate(self):
        return len(self.key) > 0


class CommonChunk(Chunk):
    '''The plain AIFF version of this chunk stops after the sample rate (18 bytes),
    the AIFC one adds the compression type and its human readable name.'''
    ID = make_id('COMM')

    channels         = fields.StructField('h')
    sample_frames    = fields.StructField('I')
    sample_size      = fields.StructField('h')
    sample_rate      = fields.ExtendedField()
    compression_type = fields.IdField(default='NONE', optional=True)
    compression_name = fields.PascalStringField(default=NOT_COMPRESSED, optional=True)

    def __str__(self):
        return '%dch %dbit %gHz %s' % (
            self.channels.value,
            self.sample_size.value,
            self.sample_rate.value,
            self.compression_type,
        )

    def get_compression_type(self) -> int:
        return self.compression_type.value

    def mark_uncompressed(self):
        self.compression_type.value = NONE
        self.compression_name.value = NOT_COMPRESSED


class SoundDataChunk(Chunk):
    ID = make_id('SSND')

    data_offset = fields.StructField('I')
    block_size  = fields.StructField('I')
    data        = fields.BlobField()

    def decrypt(self, key: bytes):
        '''Decrypt in place the sample data with the given key.'''
        if not isinstance(self.data.value, bytearray):
            self.data.value = bytearray(self.data.value)

        cipher.decrypt(key, self.data.value)


class FormChunk(Chunk):
    '''Top level chunk: the sub-chunks we are interested in are the fields,
    any other chunk found in the file is skipped.'''
    ID = FORM

    format_version = FormatVersionChunk()
    able           = AbleChunk()
    common         = CommonChunk()
    sound_data     = SoundDataChunk()

    def __init__(self, filepath=None, **kwargs):
        self.is_aifc = False
        self.phase = FormPhase.EXPECT_FORM_HEADER
        self.chunks_seen: Set[int] = set()
        super().__init__(**kwargs)

        if filepath is not None:
            with Stream(filepath) as stream:
                self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, stream))
                self.read(stream)

    def get_dispatch_table(self) -> Dict[int, Chunk]:
        return {chunk.get_id(): chunk for _, chunk in self.get_fields()}

    def read(self, stream):
        if not isinstance(stream, Stream):
            stream = Stream(stream)

        try:
            self.phase = FormPhase.EXPECT_FORM_HEADER
            if read_id(stream) != self.ID:
                raise NotAnAIFCFile('this does not seem to be an AIFC file')

            data_size = read_int32(stream)
            if data_size < 0:
                raise ChunkBoundsViolation('FORM declares a negative size %d' % data_size)

            self.read_data(stream, stream.tell(), data_size)
        except AIFCDecryptException:
            self.phase = FormPhase.INVALID
            raise

    def read_data(self, stream, data_start: int, data_size: int):
        self.phase = FormPhase.EXPECT_FORM_TYPE
        form_type = read_id(stream)

        if form_type not in (AIFC, AIFF):
            raise UnsupportedFormType("form type '%s' is not AIFC or AIFF" % format_id(form_type))

        self.is_aifc = form_type == AIFC

        self.phase = FormPhase.WALKING
        self.walk(stream, data_start, data_size)

        self.phase = FormPhase.DECRYPTING
        self.decrypt()

        self.phase = FormPhase.DONE

    def walk(self, stream, data_start: int, data_size: int):
        data_end = data_start + data_size
        dispatch = self.get_dispatch_table()

        while stream.tell() < data_end:
            sub_chunk_id = read_id(stream)
            sub_chunk_data_size = read_int32(stream)
            sub_chunk_data_start = stream.tell()
            # the pad byte is allowed to extend one byte past the end of the parent
            sub_chunk_data_end = sub_chunk_data_start + sub_chunk_data_size + (sub_chunk_data_size % 2)

            if sub_chunk_data_size < 0 or (sub_chunk_data_start + sub_chunk_data_size) > data_end:
                raise ChunkBoundsViolation(
                    "chunk '%s' at offset %d declares size %d that doesn't fit its parent" % (
                        format_id(sub_chunk_id), sub_chunk_data_start - 8, sub_chunk_data_size))

            chunk = dispatch.get(sub_chunk_id)
            if chunk is not None:
                self.logger.debug("reading chunk '%s' of %d bytes at offset %d" % (
                    format_id(sub_chunk_id), sub_chunk_data_size, sub_chunk_data_start))
                chunk.read_data(stream, sub_chunk_data_start, sub_chunk_data_size)
                self.chunks_seen.add(sub_chunk_id)
            else:
                self.logger.debug("skipping unknown chunk '%s' of %d bytes" % (
                    format_id(sub_chunk_id), sub_chunk_data_size))

            stream.seek(sub_chunk_data_end)

    def decrypt(self):
        compression_type = self.common.get_compression_type()

        if compression_type == ABLE:
            if AbleChunk.ID not in self.chunks_seen:
                raise MissingChunk("compression type is 'able' but there is no 'Able' chunk with the key")

            self.sound_data.decrypt(self.able.key.value)
            self.common.mark_uncompressed()
        elif compression_type == NONE:
            logger.info('file was not encrypted, duplicating input file')
        else:
            raise UnsupportedCompression(
                "unsupported compression type '%s', only 'able' and 'NONE' are supported" % format_id(compression_type))

    def write_data(self, stream):
        # decrypted files are always AIFC
        write_id(stream, AIFC)

        self.format_version.write(stream)
        self.common.write(stream)
        self.sound_data.write(stream)

    def pack(self, stream):
        '''The body of the FORM is what write_data() emits, the Able chunk is left out.'''
        self.write_data(stream)

    def _get_size(self):
        return len(self.raw)

    def write(self, stream):
        body = self.raw

        write_id(stream, self.ID)
        write_int32(stream, len(body))
        stream.write(body)

    def to_bytes(self, stream=None) -> bytes:
        '''Returns the whole file, writing it also to the stream if one is given.'''
        output = Stream(b'')
        self.write(output)
        data = output.getvalue()

        if stream is not None:
            stream.write(data)

        return data

    def __str__(self):
        return '%s %s\n%s' % (format_id(self.ID), 'AIFC' if self.is_aifc else 'AIFF', self.common)
