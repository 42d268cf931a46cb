import struct

import pytest


# 44100 as 80-bit IEEE extended
RATE_44100 = b'\x40\x0e\xac\x44\x00\x00\x00\x00\x00\x00'


class AIFCBuilder:
    '''Helpers to build in memory the pieces of an AIFF/AIFC file.'''

    @staticmethod
    def chunk(chunk_id: bytes, data: bytes, size=None) -> bytes:
        size = len(data) if size is None else size
        padding = b'\x00' if len(data) % 2 else b''
        return chunk_id + struct.pack('>i', size) + data + padding

    @staticmethod
    def pstring(text: bytes) -> bytes:
        data = bytes([len(text)]) + text
        return data + (b'\x00' if len(data) % 2 else b'')

    @classmethod
    def comm(cls, compression=b'NONE', name=b'not compressed', channels=1, frames=4, sample_size=8, aiff=False):
        body = struct.pack('>hIh', channels, frames, sample_size) + RATE_44100
        if not aiff:
            body += compression + cls.pstring(name)
        return cls.chunk(b'COMM', body)

    @classmethod
    def ssnd(cls, data: bytes, offset=0, block_size=0):
        return cls.chunk(b'SSND', struct.pack('>II', offset, block_size) + data)

    @classmethod
    def fver(cls, timestamp=0xa2805140):
        return cls.chunk(b'FVER', struct.pack('>I', timestamp))

    @classmethod
    def able(cls, key: bytes):
        return cls.chunk(b'Able', key)

    @staticmethod
    def form(form_type: bytes, *chunks, size=None) -> bytes:
        body = form_type + b''.join(chunks)
        size = len(body) if size is None else size
        return b'FORM' + struct.pack('>i', size) + body


@pytest.fixture
def builder():
    return AIFCBuilder


@pytest.fixture
def rate_44100():
    return RATE_44100
