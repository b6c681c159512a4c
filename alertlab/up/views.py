import logging
import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text

from alertlab.extensions import db
from alertlab.observability.metrics import metrics_collector

logger = logging.getLogger(__name__)

up = Blueprint("up", __name__, url_prefix="/up")


@up.get("/")
def index():
    """Simple health check - returns 200 if app is running."""
    return ""


@up.get("/databases")
def databases():
    """Returns 200 if the database and the character cache both respond."""
    current_app.extensions["peanuts_cache"].ping()
    with db.engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    return ""


@up.get("/health")
def health():
    """
    Detailed health of every dependency.

    Returns:
        JSON with one entry per component, 503 when any is unhealthy
    """
    components = {
        "database": check_database(),
        "cache": check_cache(),
    }

    for component, status in components.items():
        metrics_collector.record_health_check(component, status["healthy"])

    overall_healthy = all(status["healthy"] for status in components.values())

    health_status = {
        "status": "healthy" if overall_healthy else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "alertlab",
        "components": components,
    }

    return jsonify(health_status), 200 if overall_healthy else 503


def _probe(dependency, call):
    """
    Time ``call`` and turn the outcome into a component status dict.

    Args:
        dependency: Name used for metrics and log lines
        call: Zero-argument callable that raises when unhealthy

    Returns:
        dict: Health status of the dependency
    """
    start_time = time.perf_counter()
    try:
        call()
    except Exception as e:
        latency_ms = (time.perf_counter() - start_time) * 1000
        metrics_collector.record_dependency_call(
            dependency=dependency, latency_ms=latency_ms, success=False
        )
        logger.error(
            "%s health check failed", dependency, extra={"error": str(e)}
        )
        return {
            "healthy": False,
            "latency_ms": round(latency_ms, 2),
            "error": str(e),
            "message": f"{dependency} connection failed",
        }

    latency_ms = (time.perf_counter() - start_time) * 1000
    metrics_collector.record_dependency_call(
        dependency=dependency, latency_ms=latency_ms, success=True
    )
    return {
        "healthy": True,
        "latency_ms": round(latency_ms, 2),
        "message": f"{dependency} connection successful",
    }


def check_database():
    def select_one():
        with db.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    return _probe("database", select_one)


def check_cache():
    return _probe("cache", current_app.extensions["peanuts_cache"].ping)
