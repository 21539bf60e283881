import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(__file__))


@pytest.fixture(autouse=True)
def duosplit_home(tmp_path, monkeypatch):
    """Keep the data directory inside the test's tmp dir"""
    home = tmp_path / "duosplit_home"
    monkeypatch.setenv("DUOSPLIT_HOME", str(home))
    return home
