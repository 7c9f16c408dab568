from __future__ import annotations

import types

from locostore.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    build_error_message,
    extract_error_code,
    extract_error_hint,
    parse_error_payload,
)
from locostore.domain.errors import RemoteErrorKind


def test_kind_follows_http_status() -> None:
    assert ApiClientError("x", status=404).kind is RemoteErrorKind.NOT_FOUND
    assert ApiClientError("x", status=409).kind is RemoteErrorKind.CONFLICT
    assert ApiClientError("x", status=401).kind is RemoteErrorKind.OTHER
    assert ApiServerError("x", status=500).kind is RemoteErrorKind.OTHER
    assert ApiTimeoutError("x").kind is RemoteErrorKind.OTHER
    assert isinstance(ApiTimeoutError("x"), ApiError)


def test_parse_error_payload_falls_back_to_text() -> None:
    def _broken_json():
        raise ValueError("not json")

    resp = types.SimpleNamespace(json=_broken_json, text="Bad gateway")

    assert parse_error_payload(resp) == "Bad gateway"


def test_build_error_message_uses_loco_error_field() -> None:
    payload = {"status": 404, "error": "Asset not found in project"}

    assert build_error_message("translations.get[a/fr]", 404, payload) == (
        "translations.get[a/fr]: Asset not found in project (HTTP 404)"
    )
    assert build_error_message("ctx", 500, None) == "ctx: HTTP 500"


def test_extract_code_and_hint() -> None:
    payload = {"code": 42, "errors": {"id": "Invalid asset id"}}

    assert extract_error_code(payload) == "42"
    assert extract_error_hint(payload) == "id=Invalid asset id"
    assert extract_error_hint("  plain  ") == "plain"
    assert extract_error_hint({"status": 400}) is None
