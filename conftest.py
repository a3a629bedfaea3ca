import shutil
from pathlib import Path

import pytest

from emotionagotchi.backends import FileBackend
from emotionagotchi.storage import Storage

TEST_DATA_DIR = Path("data-tests")


@pytest.fixture(autouse=True)
def clean_test_data():
    """Wipe and re-create data-tests/ before every test."""
    if TEST_DATA_DIR.exists():
        shutil.rmtree(TEST_DATA_DIR)
    TEST_DATA_DIR.mkdir(parents=True)
    yield


@pytest.fixture
def file_backend() -> FileBackend:
    return FileBackend(TEST_DATA_DIR)


@pytest.fixture
def storage(file_backend: FileBackend) -> Storage:
    return Storage(file_backend)
