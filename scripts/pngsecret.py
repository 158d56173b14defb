#!/usr/bin/env python3
'''
Hide messages into PNG files

 $ pngsecret.py encode image.png ruSt 'the secret message' [output.png]
 $ pngsecret.py decode image.png ruSt
 $ pngsecret.py remove image.png ruSt [output.png]
 $ pngsecret.py identify-text image.png
 $ pngsecret.py print image.png
'''
import logging
import sys
import os

from pngchunks.commands import (
    execute_encode,
    execute_decode,
    execute_remove,
    execute_identify_text,
    execute_print,
)
from pngchunks.exceptions import PNGChunksException


logging.basicConfig(level=logging.INFO if 'DEBUG' not in os.environ else logging.DEBUG)
logger = logging.getLogger(__name__)


# name -> (function, minimum number of arguments, maximum number of arguments)
COMMANDS = {
    'encode': (execute_encode, 3, 4),
    'decode': (execute_decode, 2, 2),
    'remove': (execute_remove, 2, 3),
    'identify-text': (execute_identify_text, 1, 1),
    'print': (execute_print, 1, 1),
}


def usage(progname):
    print(f'usage: {progname} encode <png file path> <chunk type> <message> [<output file path>]')
    print(f'       {progname} decode <png file path> <chunk type>')
    print(f'       {progname} remove <png file path> <chunk type> [<output file path>]')
    print(f'       {progname} identify-text <png file path>')
    print(f'       {progname} print <png file path>')
    sys.exit(1)


if __name__ == '__main__':
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        usage(sys.argv[0])

    command, n_min, n_max = COMMANDS[sys.argv[1]]
    args = sys.argv[2:]

    if not n_min <= len(args) <= n_max:
        usage(sys.argv[0])

    try:
        command(*args)
    except PNGChunksException as e:
        logger.debug('failed with chain %s', e.chain)
        print(f'error: {e}', file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f'error: {e}', file=sys.stderr)
        sys.exit(1)
