"""Shared fixtures: every test gets its own SQLite database and upload directory."""

from __future__ import annotations

import os
import pathlib
import sys
import tempfile

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Importing ``main`` builds a module-level app; keep its files out of the repo.
_SCRATCH_DIR = pathlib.Path(tempfile.mkdtemp(prefix="ngo_reports_tests_"))
os.environ["DATABASE_URL"] = f"sqlite:///{_SCRATCH_DIR / 'default.db'}"
os.environ["UPLOAD_DIR"] = str(_SCRATCH_DIR / "uploads")

from ngo_reports.config import Settings, reset_settings_cache  # noqa: E402
from ngo_reports.infrastructure.database import Database  # noqa: E402

reset_settings_cache()


@pytest.fixture()
def database(tmp_path: pathlib.Path):
    db = Database(f"sqlite:///{tmp_path / 'reports.db'}")
    db.initialize()
    yield db
    db.dispose()


@pytest.fixture()
def session(database: Database):
    db_session = database.session()
    yield db_session
    db_session.close()


@pytest.fixture()
def settings(tmp_path: pathlib.Path) -> Settings:
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'api.db'}",
        upload_dir=tmp_path / "uploads",
        allowed_origin="*",
    )
