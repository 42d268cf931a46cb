'''
Keyed transform of the sound data.

The payload is XOR-ed with the key repeated up to the payload length, so
the same operation encrypts and decrypts and the length never changes.

This is not known to be the transform used by the tool that writes the
'able' files: the real algorithm is not documented. It only lives here
so that replacing it doesn't touch the parser.
'''
import logging


logger = logging.getLogger(__name__)


def keystream(key: bytes, length: int) -> bytes:
    if not key:
        raise ValueError('the key must not be empty')

    repeat = length // len(key) + 1
    return (bytes(key) * repeat)[:length]


def transform(key: bytes, payload: bytearray) -> None:
    '''Apply in place the transform to the payload.'''
    length = len(payload)
    stream = keystream(key, length)
    logger.debug('transforming %d bytes with a key of %d bytes' % (length, len(key)))

    result = int.from_bytes(payload, 'big') ^ int.from_bytes(stream, 'big')
    payload[:] = result.to_bytes(length, 'big')


decrypt = transform
encrypt = transform
