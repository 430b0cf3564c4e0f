# topmark:header:start
#
#   project      : StructEmit
#   file         : __init__.py
#   file_relpath : src/structemit/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line frontend for StructEmit."""

from __future__ import annotations
