"""
constant default values for the application
"""
import os
from pathlib import Path

# other constants can be added here as needed
# get the parent folder of the project

PARENT_DIR = Path(__file__).parents[1]
LOG_FOLDER = os.path.join(PARENT_DIR, 'Logs')
LOG_FILE = os.path.join(LOG_FOLDER, 'app.log')
ENV_FILE = os.path.join(PARENT_DIR, '.env')

# region Remote Resolution
DEFAULT_MODEL = "gpt-4o-mini"
TIMEOUT_SECONDS = 45.0
MAX_RETRIES = 2
RETRY_DELAY_BASE_SECONDS = 1.0
RESOLUTION_TEMPERATURE = 0.1
CODEGEN_TEMPERATURE = 0.2
# endregion

# region Step Defaults
BLANK_PAGE_URL = "about:blank"
DEFAULT_PAGE_CONTEXT = "BasePage"
DEFAULT_TARGET_ELEMENT = "Unknown Element"
DEFAULT_SELECTOR = "body"
DEFAULT_REASONING = "AI Generated Sequence"
FAST_TRACK_REASONING = "Fast-tracked: Detected direct navigation."
EMPTY_HISTORY_SUMMARY = "Start of test"
# endregion

# region Code Generation
CODEGEN_ERROR_FILE = "error.log"
CODEGEN_ERROR_TEXT = "Failed to generate code. Please try again."
# endregion
