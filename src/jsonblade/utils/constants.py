"""Shared constants for jsonblade."""

from __future__ import annotations

DEFAULT_START_DELIMITER = "{{"
DEFAULT_END_DELIMITER = "}}"

# Directive markers placed right after the start delimiter
BLOCK_PREFIX = "#"
CLOSE_PREFIX = "/"
COMMENT_OPEN = "!--"
COMMENT_CLOSE = "--"

# Symbols used by the ``currency`` filter; unknown codes print as-is
CURRENCY_SYMBOLS: dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
}

# Depth limit for data-shape analysis (editor completions)
MAX_ANALYSIS_DEPTH = 5

# Number of array elements whose object shapes are merged during analysis
MAX_ANALYZED_ITEMS = 5

# Parsed-template LRU cache size
TEMPLATE_CACHE_SIZE = 256
