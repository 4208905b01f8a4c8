import shutil
import tempfile
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def fake_home(monkeypatch):
    """Redirect Path.home() to a temporary directory for all tests."""
    temp_home = Path(tempfile.mkdtemp())
    monkeypatch.setattr(Path, "home", lambda: temp_home)
    monkeypatch.delenv("CLIPARSER_CONFIG", raising=False)
    yield temp_home
    shutil.rmtree(temp_home, ignore_errors=True)


@pytest.fixture
def in_tmp_cwd(tmp_path, monkeypatch):
    """Run the test from an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
