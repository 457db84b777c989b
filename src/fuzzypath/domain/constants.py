from __future__ import annotations

"""
Domain Constants.

Centralizes the tuning knobs of the search engine and the identifiers used
by the persistence layer.
"""

CURRENT_CONFIG_VERSION = "1.0.0"

# Maximum number of candidates expanded further at any single tree node
DEFAULT_BRANCHING_CAP = 6

# Default truncation bound applied to the flattened result list
DEFAULT_MAX_RESULTS = 6

# Minimum fitness a name needs to survive ranking
DEFAULT_FITNESS_THRESHOLD = 1

# Previous-character placeholder at the start of a haystack (non-alphanumeric)
BOUNDARY_SENTINEL = "#"

# Separators accepted between query fragments, regardless of platform
QUERY_SEPARATORS = ("/", "\\")
