# topmark:header:start
#
#   project      : StructEmit
#   file         : __init__.py
#   file_relpath : src/structemit/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Logging and settings for StructEmit."""

from __future__ import annotations
