# cv_analyzer/app/core/config.py
from pathlib import Path
import os

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parents[3]
DATA_DIR = Path(os.getenv("LOG_DIR", BASE_DIR / "shared_data"))

# ---- n8n webhook ------------------------------------------------------------
# analyze / score share one webhook; the "mode" form field tells them apart
WEBHOOK_BASE_URL = os.getenv("WEBHOOK_BASE_URL", "http://localhost:5678").rstrip("/")
WEBHOOK_PATH = os.getenv("WEBHOOK_PATH", "/webhook-test/7ad3dbbe-a478-4710-b3fa-dafdccc5c4d5")

ANALYZE_URL = os.getenv("ANALYZE_URL", f"{WEBHOOK_BASE_URL}{WEBHOOK_PATH}")
SCORE_URL = os.getenv("SCORE_URL", f"{WEBHOOK_BASE_URL}{WEBHOOK_PATH}")

WEBHOOK_TIMEOUT = float(os.getenv("WEBHOOK_TIMEOUT", "60"))

# ---- uploads ----------------------------------------------------------------
MAX_CV_FILES = int(os.getenv("MAX_CV_FILES", "10"))
PDF_CONTENT_TYPE = "application/pdf"

# ---- logging ----------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv(
    "LOG_FORMAT", "%(asctime)s %(levelname)s %(name)s [req=%(request_id)s] %(message)s"
)
LOG_FILE = os.getenv("LOG_FILE", "app.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(1_000_000)))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))

# ---- CORS -------------------------------------------------------------------
CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:8501",
    ).split(",")
    if o.strip()
]
