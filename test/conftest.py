import pytest

from alertlab.app import create_app
from alertlab.extensions import db as _db
from alertlab.peanuts.repository import PeanutsRepository


@pytest.fixture(scope="session")
def app():
    """
    Setup our flask test app, this only gets executed once.

    :return: Flask app
    """
    params = {
        "DEBUG": False,
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "PEANUTS_CACHE_TYPE": "memory",
        "PEANUTS_CACHE_FAIL_OPEN": False,
        "RANDOM_SEED": 1234,
    }

    _app = create_app(settings_override=params)

    # Simulated latency only slows the suite down.
    _app.extensions["sleep"] = lambda seconds: None

    # Establish an application context before running the tests.
    ctx = _app.app_context()
    ctx.push()

    yield _app

    ctx.pop()


@pytest.fixture(scope="function")
def client(app):
    """
    Setup an app client, this gets executed for each test function.

    :param app: Pytest fixture
    :return: Flask app client
    """
    yield app.test_client()


@pytest.fixture(scope="session")
def db(app):
    """
    Setup our database, this only gets executed once per session.

    :param app: Pytest fixture
    :return: SQLAlchemy database session
    """
    _db.drop_all()
    _db.create_all()

    return _db


@pytest.fixture(scope="function")
def session(app, db):
    """
    Give each test an empty character table and an empty character cache.

    :param app: Pytest fixture
    :param db: Pytest fixture
    :return: SQLAlchemy database session
    """
    yield db.session

    db.session.rollback()
    PeanutsRepository().delete_all()
    app.extensions["peanuts_cache"].clear()
