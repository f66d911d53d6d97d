import json
import os
import sys
import pytest

# Ensure the backend root (containing the `wordwheel` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from wordwheel import create_app, socketio
from wordwheel.catalog import parse_catalog
from wordwheel.store import SessionStore


CATALOG_DATA = {
    'en': [
        {'letter': 'A', 'question': 'Q1', 'answer': 'ans1'},
        {'letter': 'B', 'question': 'Q2', 'answer': 'ans2'},
    ],
    'es': [
        {'letter': 'A', 'question': 'P1', 'answer': 'uno'},
        {'letter': 'B', 'question': 'P2', 'answer': 'dos'},
        {'letter': 'C', 'question': 'P3', 'answer': 'tres'},
    ],
}


class FakeClock:
    def __init__(self, start=1_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def catalog():
    return parse_catalog(CATALOG_DATA)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(catalog, clock):
    return SessionStore(catalog, duration=300, clock=clock)


@pytest.fixture()
def questions_path(tmp_path):
    path = tmp_path / 'questions.json'
    path.write_text(json.dumps(CATALOG_DATA), encoding='utf-8')
    return str(path)


@pytest.fixture()
def test_config(questions_path):
    class TestConfig:
        TESTING = True
        SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
        QUESTIONS_PATH = questions_path
        DEFAULT_LANGUAGE = 'en'
        GAME_DURATION_SEC = 300
        TIMER_TICK_SEC = 0.05
        SESSION_ID_COOKIE = 'session_id'
        SESSION_COOKIE_MAX_AGE_SEC = 3600
        CORS_ORIGINS = ['http://localhost:5173']
    return TestConfig


@pytest.fixture()
def flask_app(test_config):
    application = create_app(test_config)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
