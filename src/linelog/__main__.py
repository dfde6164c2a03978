"""Module entrypoint.

Allows:
    python -m linelog "message" --level WARN
"""

from __future__ import annotations

from linelog.cli import main

if __name__ == "__main__":
    main()
