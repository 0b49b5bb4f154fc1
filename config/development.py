import os

from .config import *  # noqa: F401,F403
from .config import dev_password_hash

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# Local convenience only; production must set ADMIN_PASSWORD_HASH.
ADMIN_PASSWORD_HASH = os.getenv("ADMIN_PASSWORD_HASH") or dev_password_hash("123")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed classes and the registration gate on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))
