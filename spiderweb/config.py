"""
Configuration constants for the spiderweb project.

All paths, settings, and tunable parameters are defined here.
Values that vary per deployment are read from environment variables
(scripts load a local .env first via python-dotenv).
"""

import os
from pathlib import Path

# =============================================================================
# Path Configuration
# =============================================================================

# Project root is parent of spiderweb/
PROJECT_ROOT = Path(__file__).parent.parent

# Data directory (contains adjacency lists and msgpack topologies)
DATA_DIR = Path(os.environ.get("SPIDERWEB_DATA_DIR", PROJECT_ROOT / "data"))

# Default graph files
DEFAULT_GRAPH_PATH = DATA_DIR / "web.txt"
LINK_GRAPH_PATH = DATA_DIR / "link_graph.msgpack"

# =============================================================================
# Web Configuration
# =============================================================================

# Name reported for identifiers the dictionary never issued
BLANK_NAME = "<unnamed>"

# Check adjacency symmetry after every structural mutation (full scan each time)
DEBUG_CHECKS = os.environ.get("SPIDERWEB_DEBUG_CHECKS", "0").lower() in ("1", "true", "yes")

# =============================================================================
# Search Configuration
# =============================================================================

# Number of threads advancing explorers within one round (1 = sequential)
SEARCH_WORKERS = max(1, int(os.environ.get("SPIDERWEB_WORKERS", "1")))

# Frontier size below which a round is advanced inline even when workers > 1
PARALLEL_FRONTIER_MIN = 8

# =============================================================================
# Export Configuration
# =============================================================================

# Formats accepted by api.dump()
DUMP_FORMATS = ("text", "graphviz")

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# =============================================================================
# Validation Helpers
# =============================================================================

def validate_data_files() -> dict[str, bool]:
    """Check which data files exist."""
    return {
        "web": DEFAULT_GRAPH_PATH.exists(),
        "link_graph": LINK_GRAPH_PATH.exists(),
    }


def get_missing_data_files() -> list[str]:
    """Return list of missing data file names."""
    status = validate_data_files()
    return [name for name, exists in status.items() if not exists]
