from __future__ import annotations

import json
import types
from typing import Any, Dict, List

import pytest
from requests import exceptions as req_exc

from locostore.adapters.api_errors import ApiTimeoutError
from locostore.adapters.http_client import HttpConfig, RetryingSession


class _FlakyRequests:
    """Stands in for ``requests.Session``; fails ``failures`` times first."""

    def __init__(self, failures: int = 0) -> None:
        self.failures = failures
        self.calls: List[Dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.failures:
            self.failures -= 1
            raise req_exc.ConnectTimeout("slow")
        return types.SimpleNamespace(status_code=200)


def _session(failures: int = 0, retries: int = 2) -> RetryingSession:
    session = RetryingSession("secret", HttpConfig(request_timeout_s=7, retries=retries))
    session.session = _FlakyRequests(failures)  # type: ignore[assignment]
    return session


def test_get_sends_loco_authorization_and_timeout() -> None:
    session = _session()

    session.get("https://loco.test/api/x", params={"a": 1})

    call = session.session.calls[0]
    assert call["method"] == "GET"
    assert call["headers"]["Authorization"] == "Loco secret"
    assert call["headers"]["Accept"] == "application/json"
    assert call["params"] == {"a": 1}
    assert call["timeout"] == 7


def test_post_body_is_utf8_text() -> None:
    session = _session()

    session.post("https://loco.test/api/t", body="Grüße")

    call = session.session.calls[0]
    assert call["data"] == "Grüße".encode("utf-8")
    assert call["headers"]["Content-Type"] == "text/plain; charset=utf-8"


def test_post_form_is_sent_as_dict() -> None:
    session = _session()

    session.post("https://loco.test/api/assets", form={"id": "messages.hello"})

    call = session.session.calls[0]
    assert call["data"] == {"id": "messages.hello"}
    assert "Content-Type" not in call["headers"]


def test_patch_serializes_json() -> None:
    session = _session()

    session.patch("https://loco.test/api/assets/a.json", json_body={"notes": "n"})

    call = session.session.calls[0]
    assert json.loads(call["data"]) == {"notes": "n"}
    assert call["headers"]["Content-Type"] == "application/json"


def test_retries_transport_failures_then_succeeds() -> None:
    session = _session(failures=2, retries=2)

    resp = session.delete("https://loco.test/api/translations/a/fr")

    assert resp.status_code == 200
    assert len(session.session.calls) == 3


def test_raises_timeout_after_exhausting_retries() -> None:
    session = _session(failures=5, retries=1)

    with pytest.raises(ApiTimeoutError) as excinfo:
        session.get("https://loco.test/api/x")

    assert excinfo.value.context == "GET https://loco.test/api/x"
    assert len(session.session.calls) == 2
