"""Randomness and sleeping for the failure simulators.

Views draw from the ``random.Random`` and sleep through the callable stored
on the app, so tests can swap in a seeded generator and a no-op sleep.
"""

import random
import time

from flask import current_app


def init_simulation(app, rng=None, sleep=None):
    """
    Register the simulators' random generator and sleep function.

    :param app: Flask application instance
    :param rng: random.Random instance, seeded from RANDOM_SEED by default
    :param sleep: callable taking seconds, time.sleep by default
    :return: None
    """
    if rng is None:
        seed = app.config.get("RANDOM_SEED")
        rng = random.Random(int(seed)) if seed not in (None, "") else random.Random()

    app.extensions["rng"] = rng
    app.extensions["sleep"] = sleep or time.sleep

    return None


def rng():
    return current_app.extensions["rng"]


def sleep(seconds):
    current_app.extensions["sleep"](seconds)
