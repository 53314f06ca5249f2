import platform
import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from ...extensions import db

health_bp = Blueprint("health", __name__, url_prefix="/api")

_STARTED = time.monotonic()


def _now():
    return datetime.now(timezone.utc).isoformat()


@health_bp.route("/health", methods=["GET"])
def health():
    checks = {}
    status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error("Health check database failure: %s", exc)
        status = "error"
        checks["database"] = "error"
    checks["python_version"] = platform.python_version()
    checks["environment"] = current_app.config["APP_ENV"]

    body = {
        "status": status,
        "timestamp": _now(),
        "version": current_app.config["APP_VERSION"],
        "checks": checks,
    }
    return jsonify(body), 200 if status == "ok" else 503


@health_bp.route("/status", methods=["GET"])
def status():
    seconds = int(time.monotonic() - _STARTED)
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, secs = divmod(rest, 60)
    return jsonify(
        application="expensebook",
        version=current_app.config["APP_VERSION"],
        environment=current_app.config["APP_ENV"],
        timestamp=_now(),
        uptime={"seconds": seconds, "formatted": f"{days}d {hours}h {minutes}m {secs}s"},
    )
