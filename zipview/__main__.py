"""Module entrypoint for ``python -m zipview``.

Nested viewers are spawned through this module, so it must behave exactly
like the console script. All argument parsing happens in ``zipview.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
