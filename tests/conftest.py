from types import SimpleNamespace

import pytest

from contract_sources.clients.explorer import client as client_module

from .helpers import FakeClient


@pytest.fixture
def fake_client_factory():
    return FakeClient


@pytest.fixture
def no_sleep(monkeypatch):
    """Replace the client's post-request sleep and record requested delays."""
    delays = []
    monkeypatch.setattr(client_module, "time", SimpleNamespace(sleep=delays.append))
    return delays
