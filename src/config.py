"""
Customer Status Portal settings
Read from the environment, plus a project .env file during local development
"""
import os
import json
import tempfile
from pathlib import Path
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent

if (PROJECT_ROOT / '.env').exists():
    load_dotenv(PROJECT_ROOT / '.env')

# ═══════════════════════════════════════════════════════════════════
# GOOGLE SHEETS CREDENTIALS
# ═══════════════════════════════════════════════════════════════════

def uses_workload_identity() -> bool:
    """Cloud Run and GKE hand out a service account through the metadata server"""
    return bool(os.getenv('K_SERVICE') or os.getenv('KUBERNETES_SERVICE_HOST'))


def resolve_credentials():
    """
    Find the service account key used to open the customer sheet.

    Checked in order: GOOGLE_SHEETS_CREDENTIALS_FILE, config/credentials.json,
    then GOOGLE_SHEETS_CREDENTIALS_JSON (copied to a temp file).

    Returns:
        Path to the key file, or None to use Application Default Credentials
    """
    for candidate in (os.getenv('GOOGLE_SHEETS_CREDENTIALS_FILE'), 'config/credentials.json'):
        if not candidate:
            continue
        path = Path(candidate)
        if not path.is_absolute():
            path = PROJECT_ROOT / path
        if path.exists():
            print(f"[CONFIG] Sheets credentials: {path}")
            return str(path)

    key_json = os.getenv('GOOGLE_SHEETS_CREDENTIALS_JSON')
    if key_json:
        key_path = Path(tempfile.gettempdir()) / 'status_portal_credentials.json'
        key_path.write_text(key_json)
        print("[CONFIG] Sheets credentials: GOOGLE_SHEETS_CREDENTIALS_JSON")
        return str(key_path)

    if uses_workload_identity():
        print("[CONFIG] Sheets credentials: Application Default Credentials")
        return None

    raise ValueError(
        "No Google Sheets credentials found. Set GOOGLE_SHEETS_CREDENTIALS_FILE "
        "or GOOGLE_SHEETS_CREDENTIALS_JSON, or add config/credentials.json"
    )


_resolved_credentials = {}

def get_credentials_path():
    """resolve_credentials(), remembered after the first successful call"""
    if 'path' not in _resolved_credentials:
        _resolved_credentials['path'] = resolve_credentials()
    return _resolved_credentials['path']


def _log_dir() -> str:
    # Container images may mount the project read-only
    path = Path(os.getenv('LOG_DIR', 'logs'))
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        path = Path(tempfile.gettempdir()) / 'status_portal' / 'logs'
        path.mkdir(parents=True, exist_ok=True)
    return str(path)


# ═══════════════════════════════════════════════════════════════════
# CONFIGURATION VALUES
# ═══════════════════════════════════════════════════════════════════

# Google Gemini Configuration
GOOGLE_API_KEY = os.getenv('GOOGLE_API_KEY')
GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.5-flash')

# Google Sheets Configuration
GOOGLE_SHEET_ID = os.getenv('GOOGLE_SHEET_ID')
# Empty means "first worksheet of the spreadsheet"
CUSTOMER_SHEET_NAME = os.getenv('CUSTOMER_SHEET_NAME', '')

# Customer sheet column mapping: record attribute -> sheet header
# Defaults match the dealership's delivery tracking sheet
_default_customer_columns = {
    'dni': 'Nro de DNI',
    'salesperson': 'Vendedor',
    'customer_name': 'Cliente',
    'sale_date': 'Fec. Vta.',
    'billed': 'Facturado',
    'registration': 'Registro',
    'registration_procedure': 'Tramite en registro',
    'patent_date': 'Fec.Patent',
    'patented': 'patentado',
    'pre_deliveries': 'Preentregas',
    'pre_delivery': 'Pre - entrega',
}
CUSTOMER_COLUMNS = dict(_default_customer_columns)
CUSTOMER_COLUMNS.update(json.loads(os.getenv('CUSTOMER_COLUMNS_JSON', '{}')))

# User-facing messages
MSG_EMPTY_DNI = 'Por favor, ingrese un DNI.'
MSG_DNI_NOT_FOUND = 'DNI no encontrado. Por favor, verifique los datos e intente nuevamente.'
MSG_SEARCH_FAILED = 'Ocurrió un error al buscar los datos. Por favor, intente más tarde.'
MSG_PENDING_PLACEHOLDER = 'Pendiente'

# Portal branding
PORTAL_TITLE = os.getenv('PORTAL_TITLE', 'Portal de Clientes')
PORTAL_SUBTITLE = os.getenv('PORTAL_SUBTITLE', 'Consulte el estado de su vehículo ingresando su DNI.')
PORTAL_COMPANY_NAME = os.getenv('PORTAL_COMPANY_NAME', 'Volkswagen Argentina')
PORTAL_VERSION = os.getenv('PORTAL_VERSION', '1.0.0')

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_DIR = _log_dir()
LOG_FILE_MAX_MB = int(os.getenv('LOG_FILE_MAX_MB', '10'))
LOG_FILE_BACKUP_COUNT = int(os.getenv('LOG_FILE_BACKUP_COUNT', '5'))

# ═══════════════════════════════════════════════════════════════════
# HTTP SERVER (FastAPI + uvicorn)
# ═══════════════════════════════════════════════════════════════════

API_PORT = int(os.getenv('API_PORT', '8000'))
API_HOST = os.getenv('API_HOST', '0.0.0.0')

# Cloud Run sets PORT to the single port it routes traffic to
_cloud_run_port = os.getenv('PORT')
if _cloud_run_port:
    API_PORT = int(_cloud_run_port)

# CORS configuration (comma-separated origins)
API_CORS_ORIGINS = os.getenv('API_CORS_ORIGINS', 'http://localhost:3000').split(',')


def validate_config():
    """Validate that all required configuration is present"""
    errors = []

    if not GOOGLE_API_KEY:
        errors.append("GOOGLE_API_KEY is not set")

    if not GOOGLE_SHEET_ID:
        errors.append("GOOGLE_SHEET_ID is not set")

    if not CUSTOMER_COLUMNS.get('dni'):
        errors.append("CUSTOMER_COLUMNS_JSON must map 'dni' to a sheet header")

    try:
        creds_path = get_credentials_path()
        if creds_path and not os.path.exists(creds_path):
            errors.append(f"Google Sheets credentials file not found: {creds_path}")
    except ValueError as e:
        errors.append(str(e))

    if errors:
        raise ValueError("Configuration errors:\n" + "\n".join(errors))

    return True


if __name__ == "__main__":
    try:
        validate_config()
        print("[OK] Configuration validated successfully")
    except ValueError as e:
        print(f"[FAIL] Configuration validation failed:\n{e}")
