from __future__ import annotations
import sys
from mdsource.app import run_app


def main() -> int:
    """Module entrypoint for `python -m mdsource.main` and the `mdsource` script."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
