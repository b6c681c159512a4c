import logging

import boto3
import click
import watchtower
from flask import Flask
from werkzeug.debug import DebuggedApplication
from werkzeug.middleware.proxy_fix import ProxyFix

from alertlab.extensions import db, debug_toolbar
from alertlab.observability import ObservabilityMiddleware, setup_logging
from alertlab.page.views import page
from alertlab.payment.views import payment
from alertlab.peanuts.cache import init_cache
from alertlab.peanuts.models import Peanuts
from alertlab.peanuts.service import init_service
from alertlab.peanuts.views import peanuts_bp
from alertlab.simulation import init_simulation
from alertlab.up.views import up

SEED_CHARACTERS = (
    ("Charlie Brown", "The main character, a lovable loser"),
    ("Snoopy", "Charlie Brown's pet beagle"),
    ("Woodstock", "Snoopy's best friend"),
    ("Lucy van Pelt", "Bossy and opinionated"),
    ("Linus van Pelt", "Charlie Brown's best friend"),
    ("Schroeder", "Beethoven enthusiast who plays piano"),
)


def create_app(settings_override=None):
    """
    Create a Flask application using the app factory pattern.

    :param settings_override: Override settings
    :return: Flask app
    """
    app = Flask(__name__)

    app.config.from_object("config.settings")

    if settings_override:
        app.config.update(settings_override)

    setup_logging(app)
    middleware(app)

    app.register_blueprint(up)
    app.register_blueprint(page)
    app.register_blueprint(payment)
    app.register_blueprint(peanuts_bp)

    extensions(app)
    register_cli(app)
    configure_cloudwatch_logging(app)

    return app


def register_cli(app):
    """Register custom Flask CLI commands."""

    @app.cli.command("db-reset")
    def db_reset_command():
        """Drop and recreate all tables, then empty the character cache."""
        db.drop_all()
        db.create_all()
        app.extensions["peanuts_cache"].clear()
        click.echo("Database and Peanuts cache reset.")

    @app.cli.command("seed-peanuts")
    def seed_peanuts_command():
        """Create a few Peanuts characters through the cached service."""
        service = app.extensions["peanuts_service"]
        for name, description in SEED_CHARACTERS:
            peanuts = service.save(Peanuts(name=name, description=description))
            click.echo(f"  {peanuts.id}  {peanuts.name}")
        click.echo(f"Done: {len(SEED_CHARACTERS)} characters created.")


def extensions(app):
    """
    Register 0 or more extensions (mutates the app passed in).

    :param app: Flask application instance
    :return: None
    """
    debug_toolbar.init_app(app)
    db.init_app(app)
    init_simulation(app)
    init_service(app, init_cache(app))

    return None


def configure_cloudwatch_logging(app):
    """
    Attach an AWS CloudWatch Logs handler to the root logger so that
    ERROR-level (and above) logs, including every failed request, are
    shipped to CloudWatch.

    Controlled by the CLOUDWATCH_ENABLED env-var / config flag.
    When disabled no AWS calls are made.

    :param app: Flask application instance
    :return: None
    """
    if not app.config.get("CLOUDWATCH_ENABLED"):
        app.logger.debug("CloudWatch logging is disabled")
        return

    region = app.config.get("AWS_REGION", "us-east-1")
    log_group = app.config.get("CLOUDWATCH_LOG_GROUP", "alertlab")
    log_stream = app.config.get("CLOUDWATCH_LOG_STREAM", "error-logs")
    log_level_name = app.config.get("CLOUDWATCH_LOG_LEVEL", "ERROR")
    log_level = getattr(logging, log_level_name.upper(), logging.ERROR)

    cw_handler = watchtower.CloudWatchLogHandler(
        log_group_name=log_group,
        log_stream_name=log_stream,
        boto3_client=boto3.client("logs", region_name=region),
        send_interval=10,
        create_log_group=True,
        create_log_stream=True,
    )

    cw_handler.setLevel(log_level)
    cw_handler.setFormatter(
        logging.Formatter("[%(asctime)s] %(levelname)s in %(module)s: %(message)s")
    )

    # app.logger propagates to the root logger, one handler covers both.
    logging.getLogger().addHandler(cw_handler)

    app.logger.info(
        "CloudWatch logging enabled → group=%s stream=%s level=%s",
        log_group,
        log_stream,
        log_level_name,
    )


def middleware(app):
    """
    Register 0 or more middleware (mutates the app passed in).

    :param app: Flask application instance
    :return: None
    """
    # Enable the Flask interactive debugger in the brower for development.
    if app.debug:
        app.wsgi_app = DebuggedApplication(app.wsgi_app, evalex=True)

    # Set the real IP address into request.remote_addr when behind a proxy.
    app.wsgi_app = ProxyFix(app.wsgi_app)

    ObservabilityMiddleware(app)

    return None
