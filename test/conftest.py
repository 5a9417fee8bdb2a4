import pytest

from pulse.app import create_app


@pytest.fixture
def app():
    """
    Setup our flask test app, a fresh one per test so the error rate and
    the metrics registry never leak between tests.

    :return: Flask app
    """
    params = {
        "DEBUG": False,
        "TESTING": True,
        "APP_ENV": "test",
        "APP_VERSION": "9.9.9",
        "FAULT_INITIAL_RATE": 0.0,
        "FAULT_RANDOM_SEED": 1234,
        "METRICS_PROCESS_COLLECTORS": False,
        "CLOUDWATCH_ENABLED": False,
    }

    _app = create_app(settings_override=params)

    ctx = _app.app_context()
    ctx.push()

    yield _app

    ctx.pop()


@pytest.fixture
def client(app):
    """
    Setup an app client, this gets executed for each test function.

    :param app: Pytest fixture
    :return: Flask app client
    """
    yield app.test_client()
