"""Payment simulators for alerting demos.

POST /payment draws an outcome from a fixed table:

- 70% success (200)
- 10% bad request (400), invalid payment data
- 10% payment declined (402)
- 5% upstream timeout (503)
- 5% internal error (500)

GET /health/payment-gateway reports healthy 90% of the time and degraded
(503) otherwise. Both are simulations, the failures are responses and are
never retried.
"""

import logging
import math
import time

from flask import Blueprint, jsonify, request
from werkzeug.exceptions import (
    BadRequest,
    HTTPException,
    InternalServerError,
    ServiceUnavailable,
)

from alertlab.observability.metrics import metrics_collector
from alertlab.simulation import rng, sleep

logger = logging.getLogger(__name__)

payment = Blueprint("payment", __name__)

DEFAULT_AMOUNT = 100.00


class PaymentRequired(HTTPException):
    code = 402
    description = "Payment required."


# (exclusive upper bound of a 0-99 roll, status code, error, message, log level)
PAYMENT_OUTCOMES = (
    (70, 200, None, None, logging.INFO),
    (80, 400, BadRequest, "Invalid payment data", logging.WARNING),
    (90, 402, PaymentRequired, "Payment declined by issuer", logging.WARNING),
    (95, 503, ServiceUnavailable, "Payment gateway timeout", logging.ERROR),
    (100, 500, InternalServerError, "Internal payment error", logging.ERROR),
)

HEALTHY_PERCENT = 90
HEALTHY_LATENCY_MS = (10, 50)
DEGRADED_LATENCY_MS = (1000, 5000)


def payment_outcome(roll):
    """Map a roll in [0, 100) to its row in PAYMENT_OUTCOMES."""
    for outcome in PAYMENT_OUTCOMES:
        if roll < outcome[0]:
            return outcome
    raise ValueError(f"roll must be in [0, 100), got {roll}")


def parse_amount(raw):
    if raw is None:
        return DEFAULT_AMOUNT
    try:
        amount = float(raw)
    except ValueError:
        raise BadRequest(f"amount must be a number, got {raw!r}")
    if not math.isfinite(amount):
        raise BadRequest(f"amount must be finite, got {raw!r}")
    return amount


@payment.errorhandler(HTTPException)
def payment_error(error):
    return jsonify(
        {
            "status": "error",
            "error": error.name,
            "message": error.description,
        }
    ), error.code


@payment.post("/payment")
def process_payment():
    amount = parse_amount(request.args.get("amount"))

    # Simulated processing time, 50-500ms.
    try:
        sleep(rng().randrange(50, 500) / 1000)
    except InterruptedError:
        logger.warning("Payment processing sleep interrupted: amount=%s", amount)

    _, status, error, message, level = payment_outcome(rng().randrange(100))
    metrics_collector.record_payment_outcome(status)

    if error is not None:
        logger.log(
            level, "Payment failed (%s %s): amount=%s", status, message, amount
        )
        raise error(message)

    logger.info("Payment processed successfully: amount=%s", amount)
    return jsonify(
        {
            "status": "success",
            "transactionId": f"TXN-{int(time.time() * 1000)}",
            "amount": amount,
        }
    )


@payment.get("/health/payment-gateway")
def payment_gateway_health():
    if rng().randrange(100) < HEALTHY_PERCENT:
        return jsonify(
            {
                "status": "healthy",
                "latency_ms": rng().randrange(*HEALTHY_LATENCY_MS),
            }
        )

    logger.warning("Payment gateway health check degraded")
    return jsonify(
        {
            "status": "degraded",
            "latency_ms": rng().randrange(*DEGRADED_LATENCY_MS),
        }
    ), 503
