"""Pytest configuration for the aihub_providers test suite.

Every test starts from a clean provider environment so developer shells with
real keys exported never leak into assertions or reach the network.
"""

from __future__ import annotations

import os
from typing import Any, Callable, List

import httpx
import pytest

from aihub_providers.base.http import HttpConnector

_ENV_PREFIXES = ("AI_", "OPENAI_", "ANTHROPIC_", "AIHUB_")


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove provider-related variables for the duration of a test."""
    for name in list(os.environ):
        if name.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def captured_requests() -> List[httpx.Request]:
    return []


@pytest.fixture()
def stub_connector(captured_requests: List[httpx.Request]) -> Callable[..., HttpConnector]:
    """Build an ``HttpConnector`` whose transport answers from a stub.

    ``reply`` is either an ``httpx.Response`` or an exception class/instance to
    raise as the transport failure. Sent requests are appended to
    ``captured_requests``.
    """

    def _factory(reply: Any) -> HttpConnector:
        def handler(request: httpx.Request) -> httpx.Response:
            captured_requests.append(request)
            if isinstance(reply, type) and issubclass(reply, Exception):
                raise reply("stubbed transport failure", request=request)
            if isinstance(reply, Exception):
                raise reply
            return reply

        return HttpConnector(transport=httpx.MockTransport(handler))

    return _factory

