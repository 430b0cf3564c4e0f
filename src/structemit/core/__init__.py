# topmark:header:start
#
#   project      : StructEmit
#   file         : __init__.py
#   file_relpath : src/structemit/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Backend-independent building blocks: formats, attributes, errors and the value walker."""

from __future__ import annotations
