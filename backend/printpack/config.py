"""Application configuration. Loads from environment and .env file."""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
# Load .env from cwd, then backend/.env, then project root .env
load_dotenv()
load_dotenv(BASE_DIR / ".env")
load_dotenv(BASE_DIR.parent / ".env")

# Uploads
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".jfif"}
MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB", "50"))
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024

# Output encoding. Print output is always high quality JPEG at 300 DPI.
JPEG_QUALITY = 95
SOURCE_DPI = 300
ZIP_COMPRESSION_LEVEL = int(os.getenv("ZIP_COMPRESSION_LEVEL", "6"))
ARCHIVE_FILENAME = "print-formats.zip"
MERGED_PDF_NAME = "merged.pdf"

# Request defaults (form fields left empty)
DEFAULT_FIT_MODE = "contain"
DEFAULT_BG_COLOR = "#FFFFFF"

# Concurrency: resize workers per request (1 = sequential)
MAX_WORKERS = int(os.getenv("MAX_WORKERS", str(min(4, os.cpu_count() or 1))))

# Server (for uvicorn)
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
# CORS: comma-separated origins, e.g. "http://localhost:3000,http://127.0.0.1:3000"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",") if o.strip()]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("printpack")
