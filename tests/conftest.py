from __future__ import annotations

from collections.abc import Iterator

import pytest

from appfactory.application_factory import ApplicationFactory


@pytest.fixture(autouse=True)
def isolated_application_factory(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start and end every test without a global factory or cached settings."""
    for var in ("APPFACTORY_CACHE_TYPE", "APPFACTORY_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    ApplicationFactory.clear()
    try:
        yield
    finally:
        ApplicationFactory.clear()
