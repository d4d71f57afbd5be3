import os
import sys
from pathlib import Path
import pytest
from helpers import mark_by_dir


@pytest.fixture(autouse=True)
def _ensure_src_on_syspath():
    # Add project src/ to sys.path for src-layout imports
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))
    yield


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    # Host settings that would change colors, timezones or config
    for name in ("NO_COLOR", "FORCE_COLOR", "TZ"):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("LOG_TRANSPORT_"):
            monkeypatch.delenv(name, raising=False)
    yield


TESTS = Path(__file__).parent

def pytest_collection_modifyitems(config, items):
    # Mark tests by directory structure
    mark_by_dir(items, TESTS / "log_transport" / "core", pytest.mark.unit)
    mark_by_dir(items, TESTS / "log_transport" / "infra", pytest.mark.integration)
    mark_by_dir(items, TESTS / "log_transport" / "app", pytest.mark.e2e)
    mark_by_dir(items, TESTS / "log_transport" / "shared", pytest.mark.unit)
