"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = PROJECT_ROOT / "data" / "db" / "timesheets.db"
OUTPUT_DIR = PROJECT_ROOT / "output"

# =============================================================================
# REPORT IDENTITY
# =============================================================================

REPORT_COMPANY = os.environ.get("REPORT_COMPANY", "")
REPORT_PERSON = os.environ.get("REPORT_PERSON", "")

SHEET_NAME = "Foglio 1"
SHEET_TITLE = "TIME REPORT MENSILE"
EXPENSE_TITLE = "SPESE MENSILI"
HEADER_LABELS = ["Società", "Risorsa", "Mese"]

MONTH_NAMES = [
    "gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
    "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre",
]

# =============================================================================
# PAGE LAYOUT
# =============================================================================

PAGE_HEIGHT = int(os.environ.get("PAGE_HEIGHT", "33"))
PAGE_WIDTH = 12  # Column after which the print area is split
PAGE_SKIP_ROWS = 3  # Blank rows between the last row of a page and the next header

TITLE_ROW = 2
HEADER_BLOCK_ROW = 4
TABLE_HEADER_ROW = 9
FIRST_COLUMN = 2  # Column B

EXPENSE_BLANK_ROWS = 7

# =============================================================================
# COLUMNS
# =============================================================================

COL_DATE = "DATA"
COL_CLIENT = "CLIENTE"
COL_PROJECT = "PROGETTO"
COL_DESCRIPTION = "DESCRIZIONE"
COL_START = "H. INIZIO"
COL_END = "H. FINE"
COL_TOTAL = "TOTALE"
COL_LEAVE = "FERIE/PERMESSI"
COL_PRESENCE = "IN PRESENZA"

DATA_COLUMNS = [
    COL_DATE, COL_CLIENT, COL_PROJECT, COL_DESCRIPTION,
    COL_START, COL_END, COL_TOTAL, COL_LEAVE, COL_PRESENCE,
]

# Columns merged into one block for rows sharing the same date
MERGE_COLUMNS = [COL_DATE, COL_LEAVE, COL_PRESENCE]

EXPENSE_COLUMNS = ["DATA", "PROGETTO", "LUOGO", "DESCRIZIONE SPESA", "EURO"]

# Widths for columns A..K
COLUMN_WIDTHS = [0, 11, 13, 14, 30, 9, 8, 8, 15, 12, 0]

# Report column -> CSV field of the detailed export
CSV_FIELDS = {
    COL_DATE: "Start date",
    COL_CLIENT: "Client",
    COL_PROJECT: "Project",
    COL_DESCRIPTION: "Description",
    COL_START: "Start time",
    COL_END: "End time",
}
CSV_TAGS_FIELD = "Tags"

INPUT_DATE_FORMAT = "%Y-%m-%d"
INPUT_TIME_FORMAT = "%H:%M:%S"
DISPLAY_DATE_FORMAT = "%d/%m/%Y"

# =============================================================================
# CLASSIFICATION
# =============================================================================

LEAVE_TAGS = ("ferie", "permesso")
REMOTE_TAG = "remot"

PRESENT_FLAG = "S"
REMOTE_FLAG = "N"

# =============================================================================
# PALETTE
# =============================================================================

DARK_GREEN = "548235"
LIGHT_GREEN = "92D050"
PALE_GREEN = "C6E0B4"
LIGHT_GREY = "D9D9D9"
WHITE = "FFFFFF"

# =============================================================================
# PRINT SETUP
# =============================================================================

PRINT_SIDE_MARGIN = 0.31496062992126
PRINT_VERTICAL_MARGIN = 0.748031496062992

# =============================================================================
# TOGGL TRACK (from environment)
# =============================================================================

TOGGL_API_TOKEN = os.environ.get("TOGGL_API_TOKEN", "")
TOGGL_USER_AGENT = os.environ.get("TOGGL_USER_AGENT", "timesheet-report")
TOGGL_WORKSPACE_ID = os.environ.get("TOGGL_WORKSPACE_ID", "")
TOGGL_API_URL = "https://api.track.toggl.com/api/v9"
TOGGL_REPORTS_URL = "https://api.track.toggl.com/reports/api/v3"
TOGGL_TIMEOUT_SECONDS = int(os.environ.get("TOGGL_TIMEOUT_SECONDS", "30"))

# =============================================================================
# API CONFIGURATION
# =============================================================================

TIMESHEET_API_KEY = os.environ.get("TIMESHEET_API_KEY", "")
API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
MAX_UPLOAD_SIZE_MB = int(os.environ.get("MAX_UPLOAD_SIZE_MB", "10"))
MAX_UPLOAD_SIZE_BYTES = MAX_UPLOAD_SIZE_MB * 1024 * 1024
API_VERSION = "1.0.0"
