import logging
import time

import requests
from flask import Blueprint, current_app, request

from alertlab.observability.metrics import metrics_collector
from alertlab.simulation import rng, sleep

logger = logging.getLogger(__name__)

page = Blueprint("page", __name__)

# 200 is listed twice so it comes up 40% of the time.
RANDOM_STATUS_CODES = (200, 200, 300, 400, 500)


@page.get("/")
def home():
    name = request.args.get("name", "World")
    logger.debug("Request headers: %s", dict(request.headers))
    logger.info("Hello %s!!", name)
    return f"Hello {name}!!"


@page.get("/io_task")
def io_task():
    sleep(current_app.config.get("IO_TASK_SECONDS", 1.0))
    logger.info("io_task")
    return "io_task"


@page.get("/cpu_task")
def cpu_task():
    total = 0
    for i in range(100):
        total += i * i * i
    logger.info("cpu_task")
    return "cpu_task"


@page.get("/random_sleep")
def random_sleep():
    upper = current_app.config.get("RANDOM_SLEEP_MAX_SECONDS", 2.0)
    sleep(rng().random() * upper)
    logger.info("random_sleep")
    return "random_sleep"


@page.get("/random_status")
def random_status():
    status = rng().choice(RANDOM_STATUS_CODES)
    logger.info("random_status: %s", status)
    return "random_status", status


def chain_targets(config):
    """URLs the chain endpoint calls, in order."""
    port = config.get("CHAIN_PORT", 8000)
    return [
        f"http://localhost:{port}/",
        f"http://{config.get('TARGET_ONE_HOST', 'localhost')}:{port}/io_task",
        f"http://{config.get('TARGET_TWO_HOST', 'localhost')}:{port}/cpu_task",
    ]


@page.get("/chain")
def chain():
    """Call three service instances one after another.

    Any upstream failure propagates and the request ends in a 500.
    """
    timeout = current_app.config.get("CHAIN_TIMEOUT", 5)

    logger.debug("chain is starting")
    for url in chain_targets(current_app.config):
        start = time.perf_counter()
        success = False
        try:
            response = requests.get(url, timeout=timeout)
            response.raise_for_status()
            success = True
        finally:
            metrics_collector.record_dependency_call(
                dependency=url,
                latency_ms=(time.perf_counter() - start) * 1000,
                success=success,
            )
    logger.debug("chain is finished")

    return "chain"


@page.get("/error_test")
def error_test():
    raise RuntimeError("Error test")
