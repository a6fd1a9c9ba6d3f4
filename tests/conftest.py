# File: tests/conftest.py

import os
import sys
import shutil
import logging
import subprocess
import tempfile
import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import database_exists, create_database

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Keep the default SQLite file out of the working tree
os.environ.setdefault("VIDSCRIBE_DATA_DIR", tempfile.mkdtemp(prefix="vidscribe_data_"))

# 3. Import after the environment is prepared
from vidscribe.core.database.base import Base
from vidscribe.core.database.connection import build_engine, init_db


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """Captures library debug logs (pytest prints them for failing tests)."""
    logging.getLogger("vidscribe").setLevel(logging.DEBUG)
    yield


@pytest.fixture(scope="session")
def test_engine(tmp_path_factory):
    """
    Runs once per test session.
    Creates a throwaway SQLite database and its tables.
    """
    db_path = tmp_path_factory.mktemp("db") / "vidscribe_test.db"
    engine = build_engine(f"sqlite:///{db_path}")

    if not database_exists(engine.url):
        create_database(engine.url)

    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine):
    """
    Session factory bound to the test database.
    Every table is emptied before the test uses it.
    """
    with test_engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())

    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="module")
def synthetic_video(tmp_path_factory):
    """
    A 2-second test video with a sine wave audio track.
    Skips the requesting test when ffmpeg is not installed.
    """
    if not (shutil.which("ffmpeg") and shutil.which("ffprobe")):
        pytest.skip("ffmpeg/ffprobe not installed")

    path = tmp_path_factory.mktemp("media") / "src_audio_test.mp4"
    cmd = [
        "ffmpeg", "-y",
        "-f", "lavfi", "-i", "testsrc=duration=2:size=320x240:rate=30",
        "-f", "lavfi", "-i", "sine=frequency=1000:duration=2",
        "-c:v", "mpeg4", "-c:a", "aac",
        "-map", "0:v", "-map", "1:a",
        str(path)
    ]
    # subprocess directly so the setup is independent of the code under test
    subprocess.run(cmd, check=True, capture_output=True)
    return path
