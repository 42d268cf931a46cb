import logging

from aifcdecrypt.audio.aifc import FormChunk


logger = logging.getLogger(__name__)


def decrypt_bytes(data: bytes) -> bytes:
    '''Return the decrypted AIFC file for the given encrypted (or plain) one.'''
    form = FormChunk(data)

    return form.to_bytes()


def decrypt_file(input_path, output_path) -> FormChunk:
    # parse and decrypt everything before touching the output
    # so that a failure never leaves a partial file behind
    form = FormChunk(str(input_path))
    data = form.to_bytes()

    logger.debug('writing %d bytes to \'%s\'' % (len(data), output_path))
    with open(output_path, 'wb') as f:
        f.write(data)

    return form
