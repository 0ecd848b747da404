"""Root test configuration: isolate tests from MDEDIT_* environment settings"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove MDEDIT_<FIELD> variables inherited from the developer's shell."""
    for name in list(os.environ):
        if name.startswith("MDEDIT_"):
            monkeypatch.delenv(name)
