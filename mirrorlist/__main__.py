# __main__.py -- Entry point for `python -m mirrorlist`.
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
