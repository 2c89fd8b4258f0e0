"""
Centralized constants for snipbox.

Storage keys, width bounds and palette limits live here so the engine, the
panel and the CLI agree on them.
"""

import os
from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

SNIPBOX_CONFIG_DIR = Path(
    os.environ.get("SNIPBOX_CONFIG_DIR", str(Path.home() / ".config" / "snipbox"))
).expanduser()

STORE_FILENAME = "storage.json"
BUNDLED_SNIPPETS_FILE = "snippets.json"  # inside the snipbox.data package

# =============================================================================
# STORAGE KEYS
# =============================================================================

STORAGE_KEY = "snipbox_snippets"
WIDTH_KEY = "snipbox_panel_width"

# =============================================================================
# PANEL WIDTH (terminal cells)
# =============================================================================

DEFAULT_WIDTH = 42
MIN_WIDTH = 22
MAX_WIDTH = 90

# =============================================================================
# SNIPPETS & PALETTE
# =============================================================================

UNTITLED_PLACEHOLDER = "(untitled)"
DEFAULT_SOURCE_TAG = "bundle"  # prefix for fallback ids of imported items
LOCAL_ID_PREFIX = "snip"
PALETTE_RESULT_LIMIT = 200

HINT_BUNDLED = "bundled"
HINT_LOCAL = "local"

# =============================================================================
# NETWORK
# =============================================================================

DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "SNIPBOX_CONFIG_DIR": {
        "description": "Directory for the store file and logs",
        "default": None,
        "valid_values": None,
    },
    "SNIPBOX_STORE_PATH": {
        "description": "Path of the JSON store file (tests point this at a temp file)",
        "default": None,
        "valid_values": None,
    },
    "SNIPBOX_SOURCE": {
        "description": "URL or path of the external snippet list",
        "default": None,
        "valid_values": None,
    },
    "SNIPBOX_HTTP_TIMEOUT": {
        "description": "Timeout in seconds when fetching snippets over HTTP",
        "default": str(DEFAULT_HTTP_TIMEOUT_SECONDS),
        "valid_values": None,
    },
    "SNIPBOX_LOG_LEVEL": {
        "description": "Log level for the panel log file",
        "default": "INFO",
        "valid_values": ["DEBUG", "INFO", "WARNING", "ERROR"],
    },
}
