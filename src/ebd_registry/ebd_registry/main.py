from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .auth.controller import register as register_auth
from .container import build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .registrations.controller import register as register_registrations
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .students.controller import register as register_students

log = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app() -> Flask:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    debug = bool(getattr(settings, "DEBUG", False))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = debug
    app.config["TODAY_OFFSET_HOURS"] = int(getattr(settings, "TODAY_OFFSET_HOURS", 3))

    log.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module, db_config.get("user"), db_config.get("host"), db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        log.info("schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")

    container = build_container(
        db_config=db_config,
        receipts_bucket=getattr(settings, "RECEIPTS_BUCKET"),
        admin_password_hash=getattr(settings, "ADMIN_PASSWORD_HASH", ""),
        aws_region=getattr(settings, "AWS_REGION", None),
        s3_endpoint_url=getattr(settings, "S3_ENDPOINT_URL", None),
        today_offset_hours=app.config["TODAY_OFFSET_HOURS"],
        receipt_url_ttl_seconds=int(getattr(settings, "RECEIPT_URL_TTL_SECONDS", 3600)),
        magazines_by_category=getattr(settings, "MAGAZINES_BY_CATEGORY", None),
    )
    app.extensions["ebd_container"] = container

    register_auth(app, container)
    register_settings(app, container)
    register_registrations(app, container)
    register_students(app, container)
    register_reports(app, container)

    return app
