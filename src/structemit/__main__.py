# topmark:header:start
#
#   project      : StructEmit
#   file         : __main__.py
#   file_relpath : src/structemit/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Allow ``python -m structemit``."""

from __future__ import annotations

from structemit.cli.main import cli

if __name__ == "__main__":
    cli()
