import os
import sys
import tempfile
import pytest
from pathlib import Path

# Ensure project root on sys.path
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

# app reads DATABASE_URL at import time, and test modules import it during
# collection, so the temp DB has to be chosen before any of them load.
_TMP_DB_PATH = os.path.join(tempfile.mkdtemp(prefix="writing-log-"), "prompts_test.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DB_PATH}"


@pytest.fixture(scope="session")
def tmp_db_path():
    return _TMP_DB_PATH


@pytest.fixture(scope="session")
def flask_app(tmp_db_path):
    from app import app
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture(autouse=True)
def _clean_db(flask_app, tmp_db_path):
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert flask_app.config["SQLALCHEMY_DATABASE_URI"].endswith(tmp_db_path), "Refusing to clean non-temp DB"
    from models import db, Prompt, WritingSession
    with flask_app.app_context():
        Prompt.query.delete()
        WritingSession.query.delete()
        db.session.commit()
    yield
