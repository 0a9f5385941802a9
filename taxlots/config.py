from pathlib import Path
import os

from dotenv import load_dotenv

load_dotenv()

# PROJECT_ROOT is the directory containing this file's parent folder (taxlots/)
PROJECT_ROOT = Path(__file__).resolve().parents[1]
LOG_DIR = PROJECT_ROOT / "logs"

# ---------- ledger vocabulary ----------
ALGORITHMS  = ("fifo", "hifo")
SIDES       = ("buy", "sell")
FIELD_COUNT = 4               # date,side,price,quantity

# ---------- output ----------
PRICE_DECIMALS    = 2
QUANTITY_DECIMALS = 8

# ─── logging ─────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("TAXLOTS_LOG_LEVEL", "WARNING").upper()
LOG_TO_FILE = os.getenv("TAXLOTS_LOG_FILE", "").lower() in ("1", "true", "yes")
