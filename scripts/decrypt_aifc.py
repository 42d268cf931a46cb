#!/usr/bin/env python3
'''
Decrypt an AIFC file whose sound data has compression type 'able'

 $ decrypt_aifc.py encrypted.aif decrypted.aif
'''
import logging
import sys
import os

from aifcdecrypt.audio.aifc.utils import decrypt_file
from aifcdecrypt.exceptions import AIFCDecryptException


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'usage: {progname} <input aifc file> <output aifc file>')
    sys.exit(1)


def main(argv):
    if len(argv) < 3:
        usage(argv[0])

    input_path, output_path = argv[1], argv[2]

    try:
        form = decrypt_file(input_path, output_path)
    except (AIFCDecryptException, OSError) as e:
        logger.error(f'cannot decrypt \'{input_path}\': {e}')
        sys.exit(1)

    logger.info(f'{input_path} -> {output_path} ({form.common})')


if __name__ == '__main__':
    main(sys.argv)
