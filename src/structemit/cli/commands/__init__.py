# topmark:header:start
#
#   project      : StructEmit
#   file         : __init__.py
#   file_relpath : src/structemit/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructEmit CLI subcommands."""

from __future__ import annotations
