"""bundlesqueeze utilities package."""

from .constants import (
    CONFIG_FILE_NAME,
    DATA_ELEMENT_ID,
    DATA_JSON_NAME,
    ERROR_LOG_FILE,
    REPORT_HTML_NAME,
    SQUEEZE_DIR,
)
from .error_handler import handle_exceptions
from .helpers import load_json_file, save_json_file
from .logging import logger

__all__ = [
    "SQUEEZE_DIR",
    "ERROR_LOG_FILE",
    "CONFIG_FILE_NAME",
    "DATA_JSON_NAME",
    "REPORT_HTML_NAME",
    "DATA_ELEMENT_ID",
    "handle_exceptions",
    "load_json_file",
    "save_json_file",
    "logger",
]
