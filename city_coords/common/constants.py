"""Application constants."""

MAX_FILE_SIZE = 100 * 1024 * 1024
FALLBACK_COUNTRY_CODE = "XX"
COUNTRIES_FILENAME = "countries.json"
REGIONS_FILENAME = "states+cities.json"
OUTPUT_EXTENSION = ".json"
U32_MAX = 2**32 - 1

DEFAULT_RAW_DIR = "data/raw"
DEFAULT_OUT_DIR = "data/generated/per-country"
DEFAULT_REPORT_PATH = "data/generated/run_summary.json"
DEFAULT_LOG_DIR = "data/generated/run_meta"

EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "event",
    "status",
    "path",
    "country_id",
    "progress",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)
