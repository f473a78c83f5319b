from __future__ import annotations

import logging
import os

import pytest

from _helpers import sample_document
from es_exporter.config import settings as settings_mod
from es_exporter.stats.loader import load_snapshot


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Each test starts without exporter env overrides and with a fresh settings cache."""
    for key in list(os.environ):
        if key.startswith("ES_EXPORTER_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(settings_mod, "_singleton", None)
    yield
    root = logging.getLogger()
    for h in root.handlers[:]:
        if isinstance(h, logging.StreamHandler) and not type(h).__module__.startswith("_pytest"):
            root.removeHandler(h)


@pytest.fixture
def document():
    return sample_document()


@pytest.fixture
def snapshot(document):
    return load_snapshot(document)
