import os
from pathlib import Path
from types import MappingProxyType
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
SNAPSHOT_FILENAME_BASE = os.getenv("SNAPSHOT_FILENAME", "inventory_snapshot")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")
LOG_FILENAME = os.getenv("LOG_FILENAME", "dashboard.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))

# --- Service ---
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))

# --- Spreadsheet ---
SPREADSHEET_ID = os.getenv("SPREADSHEET_ID")
SHEET_RANGE = os.getenv("SHEET_RANGE", "A1:Z1000")
DEFAULT_SHEET_TITLE = "Sheet1"
SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]

# --- Service account credentials ---
GOOGLE_TYPE = os.getenv("GOOGLE_TYPE", "service_account")
GOOGLE_PROJECT_ID = os.getenv("GOOGLE_PROJECT_ID")
GOOGLE_PRIVATE_KEY_ID = os.getenv("GOOGLE_PRIVATE_KEY_ID")
GOOGLE_PRIVATE_KEY = os.getenv("GOOGLE_PRIVATE_KEY")
GOOGLE_CLIENT_EMAIL = os.getenv("GOOGLE_CLIENT_EMAIL")
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID")
GOOGLE_AUTH_URI = os.getenv(
    "GOOGLE_AUTH_URI", "https://accounts.google.com/o/oauth2/auth"
)
GOOGLE_TOKEN_URI = os.getenv("GOOGLE_TOKEN_URI", "https://oauth2.googleapis.com/token")
GOOGLE_AUTH_PROVIDER_X509_CERT_URL = os.getenv(
    "GOOGLE_AUTH_PROVIDER_X509_CERT_URL", "https://www.googleapis.com/oauth2/v1/certs"
)
GOOGLE_CLIENT_X509_CERT_URL = os.getenv("GOOGLE_CLIENT_X509_CERT_URL")
GOOGLE_UNIVERSE_DOMAIN = os.getenv("GOOGLE_UNIVERSE_DOMAIN", "googleapis.com")

# --- Dashboard ---
# Base URL of a running dashboard service, used by the CLI's remote mode.
DASHBOARD_URL = os.getenv("DASHBOARD_URL", "http://127.0.0.1:8000")
FETCH_ERROR_MESSAGE = "Failed to load inventory data. Please try again."

# --- Shared Business Logic ---
# Old product names still found in older sheets, mapped to the current names.
LEGACY_ITEM_NAMES = MappingProxyType(
    {
        "Beef Brisket": "Smoked Beef Brisket",
        "Beef Angus": 'Smoked Angus "Bri-Steak"',
        "Beef Belly": "Smoked Beef Belly",
    }
)

# Fixed price per kg. The legacy names stay here as fallbacks.
PRODUCT_PRICING = MappingProxyType(
    {
        "Smoked Beef Brisket": 3300,
        'Smoked Angus "Bri-Steak"': 3300,
        "Smoked Beef Belly": 2200,
        "Beef Brisket": 3300,
        "Beef Angus": 3300,
        "Beef Belly": 2200,
    }
)

# Define the category order in one place so the grid is consistent everywhere.
CATEGORY_ORDER = (
    "Smoked Beef Brisket",
    'Smoked Angus "Bri-Steak"',
    "Smoked Beef Belly",
)

# Price per kg shown on each category header.
CATEGORY_DISPLAY_PRICES = MappingProxyType(
    {
        "Smoked Beef Brisket": 3300,
        'Smoked Angus "Bri-Steak"': 3300,
        "Smoked Beef Belly": 2200,
    }
)


def google_credentials_info() -> dict:
    """
    Assembles the service-account info dict from the environment.
    The private key is kept as-is; the sheet source unescapes it.
    """
    return {
        "type": GOOGLE_TYPE,
        "project_id": GOOGLE_PROJECT_ID,
        "private_key_id": GOOGLE_PRIVATE_KEY_ID,
        "private_key": GOOGLE_PRIVATE_KEY,
        "client_email": GOOGLE_CLIENT_EMAIL,
        "client_id": GOOGLE_CLIENT_ID,
        "auth_uri": GOOGLE_AUTH_URI,
        "token_uri": GOOGLE_TOKEN_URI,
        "auth_provider_x509_cert_url": GOOGLE_AUTH_PROVIDER_X509_CERT_URL,
        "client_x509_cert_url": GOOGLE_CLIENT_X509_CERT_URL,
        "universe_domain": GOOGLE_UNIVERSE_DOMAIN,
    }
