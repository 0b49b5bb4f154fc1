"""Settings shared by every environment module (development/testing/production)."""

import json
import os

from werkzeug.security import generate_password_hash

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "ebd_db"),
}

# werkzeug hash of the admin password; generate with
#   python -c "from werkzeug.security import generate_password_hash as g; print(g('...'))"
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH", "")

RECEIPTS_BUCKET = os.getenv("RECEIPTS_BUCKET", "ebd-receipts")
AWS_REGION = os.getenv("AWS_REGION", os.getenv("AWS_DEFAULT_REGION", "sa-east-1"))
S3_ENDPOINT_URL = os.getenv("S3_ENDPOINT_URL") or None
RECEIPT_URL_TTL_SECONDS = int(os.getenv("RECEIPT_URL_TTL_SECONDS", "3600"))

# "Today" status screen: local day = UTC shifted by this many hours.
TODAY_OFFSET_HOURS = int(os.getenv("TODAY_OFFSET_HOURS", "3"))

# Editorial magazine counts printed on the general report.
MAGAZINES_BY_CATEGORY = {
    "children": 20,
    "adolescents": 17,
    "youth": 15,
    "new_converts": 9,
    "adults": 136,
    "teachers": 36,
}
if os.getenv("MAGAZINES_BY_CATEGORY"):
    MAGAZINES_BY_CATEGORY.update(json.loads(os.environ["MAGAZINES_BY_CATEGORY"]))


def dev_password_hash(password: str) -> str:
    return generate_password_hash(password)
