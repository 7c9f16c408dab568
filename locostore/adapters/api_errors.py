from __future__ import annotations

from typing import Any, Optional

from locostore.domain.errors import RemoteErrorKind

_MESSAGE_KEYS = ("error", "message", "detail", "title")
_HINT_KEYS = ("errors", "hint", "details")


class ApiError(RuntimeError):
    """Base class for Loco API failures.

    ``kind`` classifies the failure for callers that only care whether the
    remote resource was missing, already present, or something else.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.payload = payload
        self.context = context

    @property
    def kind(self) -> RemoteErrorKind:
        return RemoteErrorKind.from_status(self.status)


class ApiClientError(ApiError):
    """HTTP 4xx from the Loco API (404 missing asset, 409 asset conflict, ...)."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(
            message, status=status, code=code, hint=hint, payload=payload, context=context
        )


class ApiServerError(ApiError):
    """HTTP 5xx from the Loco API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of an error body without raising."""
    try:
        return resp.json()
    except Exception:
        text = getattr(resp, "text", "") or ""
        return text[:400] or None


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = _first_text(payload)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def extract_error_code(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        value = payload.get("code")
        if value is not None:
            return str(value)
    return None


def extract_error_hint(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in _HINT_KEYS:
            if key in payload:
                text = _stringify(payload[key])
                if text:
                    return text
        return None
    if isinstance(payload, list):
        return _stringify(payload)
    if isinstance(payload, str):
        return payload.strip() or None
    return None


def _first_text(payload: Any) -> Optional[str]:
    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, dict):
        for key in _MESSAGE_KEYS:
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def _stringify(data: Any, *, limit: int = 200) -> Optional[str]:
    if data is None:
        return None
    if isinstance(data, dict):
        parts = [f"{key}={_stringify(value, limit=limit)}" for key, value in data.items()]
        text = ", ".join(parts)
    elif isinstance(data, (list, tuple)):
        text = "; ".join(filter(None, (_stringify(item, limit=limit) for item in data)))
    else:
        text = str(data).strip()
    return text[:limit] or None


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "build_error_message",
    "extract_error_code",
    "extract_error_hint",
    "parse_error_payload",
]
