# config.py
from decimal import Decimal
from pathlib import Path

# --- Data Paths ---
DATA_ROOT = Path("data")
LOGS_PATH = DATA_ROOT / "logs"

# --- Strategy Catalog ---
# Shipped copy of the built-in offset table; also a template for --catalog
CONFIG_DIR = Path(__file__).resolve().parent / "config"
DEFAULT_CATALOG_PATH = CONFIG_DIR / "strategies.yaml"

# --- Logging Configuration ---
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": "default",
            "filename": str(LOGS_PATH / "earnings_schedule.log"),
            "maxBytes": 1024 * 1024 * 5,  # 5 MB
            "backupCount": 5,
        },
    },
    "root": {
        "level": "INFO",
        "handlers": ["console"],
    },
}

# --- Scanner Input Schema ---
# Column order of the backtest scanner export. Earlier exports without
# prev_earnings_result are rejected, not auto-detected.
INPUT_COLUMNS = (
    "symbol",
    "wins",
    "losses",
    "win_rate",
    "avg_trade_return",
    "total_return",
    "backtest_length",
    "next_earnings",
    "prev_earnings_result",
    "strategy",
)

# Accepted date spellings for CSV fields and CLI flags
DATE_FORMATS = ("%Y-%m-%d", "%Y%m%d")

# win_rate is trusted as given; larger drift from wins/(wins+losses) is logged
WIN_RATE_TOLERANCE = Decimal("0.01")

# --- Schedule / Report Settings ---
SCHEDULE_CONFIG = {
    "default_format": "table",          # table, csv or json
    "suffix_formats": {                 # --output suffix -> report format
        ".csv": "csv",
        ".json": "json",
        ".txt": "table",
    },
    "roll_weekends": False,             # step computed dates off weekends
    "raw_json_indent": 2,
}
