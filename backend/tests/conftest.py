from pathlib import Path
import os
import tempfile
import pytest
import redis

# Point the app at a throwaway SQLite file before `student_app` is imported;
# the engine is created and the tables are built at import time.
TEST_DB = Path(tempfile.gettempdir()) / "student_app_test.db"
if TEST_DB.exists():
    TEST_DB.unlink()
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB}"
os.environ.setdefault("ENV", "dev")

from student_app.main import app  # noqa: E402
from student_app.cache import KeyValueCache, get_cache  # noqa: E402


class InMemoryRedis:
    """Minimal stand-in for the few Redis commands the app issues."""

    def __init__(self, fail: bool = False):
        self.data: dict[str, str] = {}
        self.fail = fail

    def _check(self):
        if self.fail:
            raise redis.ConnectionError("Error connecting to localhost:6379")

    def get(self, key):
        self._check()
        return self.data.get(key)

    def set(self, key, value):
        self._check()
        self.data[key] = value
        return True

    def ping(self):
        self._check()
        return True


@pytest.fixture
def fake_redis():
    return InMemoryRedis()


@pytest.fixture(autouse=True)
def override_cache(fake_redis):
    """Serve every request from the in-memory Redis double."""
    app.dependency_overrides[get_cache] = lambda: KeyValueCache(fake_redis)
    yield
    app.dependency_overrides.pop(get_cache, None)
