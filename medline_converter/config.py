"""Configuration constants and .env loading.

WHY: Centralizes the few configurable values so they are easy to find,
update, and override. The fallback reference type, the HTTP timeout and
the CLI log level are plain module constants, not buried in logic.

HOW: python-dotenv loads the .env file on import. Constants are read
from the environment with sensible defaults.

RULES:
- DEFAULT_TYPE is a canonical type tag, used on output when a record's
  type has no MEDLINE label
- UNKNOWN_TYPE is what the parser assigns to unmapped or missing types
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# MEDLINE_* overrides may live in a .env beside the working directory
load_dotenv()

# ---------------------------------------------------------------------------
# Reference types
# ---------------------------------------------------------------------------

DEFAULT_TYPE = os.getenv("MEDLINE_DEFAULT_TYPE", "journalArticle")
"""Canonical type assumed on output when a record's type is unmapped."""

UNKNOWN_TYPE = "unknown"
"""Canonical type assigned on input when the PT label is unmapped or absent."""

# ---------------------------------------------------------------------------
# Runtime defaults
# ---------------------------------------------------------------------------

FETCH_TIMEOUT_S = float(os.getenv("MEDLINE_FETCH_TIMEOUT", "60"))
LOG_LEVEL = os.getenv("MEDLINE_LOG_LEVEL", "WARNING").upper()
