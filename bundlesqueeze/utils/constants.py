"""Centralized constants for bundlesqueeze.

Single source of truth for file names and directories shared by the
ingestion layer, the report writer and the CLI.
"""

from pathlib import Path

# ============================================================================
# OUTPUT DIRECTORIES
# ============================================================================

# Working directory for config and logs
SQUEEZE_DIR = Path("./.squeeze")

ERROR_LOG_FILE = SQUEEZE_DIR / "error.log"
CONFIG_FILE_NAME = "config.json"

# ============================================================================
# REPORT ASSETS
# ============================================================================

# Written by the build hook next to the bundle
DATA_JSON_NAME = "bundle-analyzer.json"
REPORT_HTML_NAME = "bundle-squeeze.html"

# Element in the HTML report that carries the inlined module list
DATA_ELEMENT_ID = "bundle-squeeze-data"

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

ENV_PREFIX = "BUNDLESQUEEZE"
