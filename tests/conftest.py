import os
import shutil
import tempfile
from pathlib import Path

import pytest

# 设定要在导入应用之前完成
_TMP_DIR = Path(tempfile.mkdtemp(prefix="inventory-test-"))
os.environ["DB_PATH"] = str(_TMP_DIR / "inventory.db")
os.environ["UPLOAD_DIR"] = str(_TMP_DIR / "images")

from fastapi.testclient import TestClient  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client
    shutil.rmtree(_TMP_DIR, ignore_errors=True)


@pytest.fixture
def anyio_backend():
    return "asyncio"
