# topmark:header:start
#
#   project      : StructEmit
#   file         : constants.py
#   file_relpath : src/structemit/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StructEmit Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

STRUCTEMIT: str = "structemit"
STRUCTEMIT_VERSION: str = get_version(STRUCTEMIT)

DEFAULT_SETTINGS_FILE: str = "structemit.toml"
