"""REST client for the Loco (localise.biz) API, grouped by resource."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

import requests

from locostore.domain.ports import ApiKey, AssetId, Locale
from locostore.domain.remote_models import ImportResult, RemoteAsset, RemoteTranslation
from locostore.domain.settings import DEFAULT_BASE_URL

from locostore.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    build_error_message,
    extract_error_code,
    extract_error_hint,
    parse_error_payload,
)
from locostore.adapters.http_client import HttpConfig, RetryingSession


class LocoClient:
    """HTTP client for the `/api/assets`, `/api/translations`, `/api/export`
    and `/api/import` endpoints.

    One ``RetryingSession`` is kept per project API key, created on first use.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        if not base_url:
            raise ValueError("LocoClient requires a base URL")
        self.base_url = base_url[:-1] if base_url.endswith("/") else base_url
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.sessions: Dict[ApiKey, RetryingSession] = {}
        self._log = logging.getLogger(__name__)

        self.assets = AssetsApi(self)
        self.translations = TranslationsApi(self)
        self.exports = ExportApi(self)
        self.imports = ImportApi(self)

    # ------------------------------------------------------------------
    def session(self, api_key: ApiKey) -> RetryingSession:
        """Return (and lazily create) the session for one project key."""
        if not api_key:
            raise ValueError("A Loco API key is required")
        session = self.sessions.get(api_key)
        if session is None:
            session = RetryingSession(api_key, self.cfg)
            self.sessions[api_key] = session
        return session

    def make_url(self, path: str, *segments: str) -> str:
        """Build an endpoint URL, quoting each dynamic path segment."""
        quoted = [quote(str(segment), safe="") for segment in segments]
        return f"{self.base_url}{path.format(*quoted)}"

    @staticmethod
    def clean_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        return {key: value for key, value in (params or {}).items() if value is not None}

    def ensure_ok(self, resp: requests.Response, ctx: str) -> None:
        """Raise typed adapter errors for non-2xx responses."""
        status = resp.status_code
        if 200 <= status < 300:
            self._log.debug("%s -> HTTP %s", ctx, status)
            return
        payload = parse_error_payload(resp)
        message = build_error_message(ctx, status, payload)
        if 400 <= status < 500:
            raise ApiClientError(
                message,
                status=status,
                code=extract_error_code(payload),
                hint=extract_error_hint(payload),
                payload=payload,
                context=ctx,
            )
        if 500 <= status < 600:
            raise ApiServerError(message, status=status, payload=payload, context=ctx)
        raise ApiError(message, status=status, payload=payload, context=ctx)

    @staticmethod
    def json_dict(resp: requests.Response) -> Dict[str, Any]:
        """Parse response JSON and require an object payload."""
        try:
            payload = resp.json()
        except Exception:
            snippet = (getattr(resp, "text", "") or "")[:400]
            raise ApiError(f"Invalid JSON response: {snippet}", status=resp.status_code)
        if not isinstance(payload, dict):
            raise ApiError("Invalid JSON response shape: expected object", status=resp.status_code)
        return dict(payload)


class _ResourceApi:
    def __init__(self, client: LocoClient) -> None:
        self._client = client


class AssetsApi(_ResourceApi):
    """Asset records: the locale independent keys of a project."""

    def create(
        self,
        api_key: ApiKey,
        asset_id: AssetId,
        *,
        text: Optional[str] = None,
        type: Optional[str] = None,
        context: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> RemoteAsset:
        """Create one asset; HTTP 409 signals that the id is already taken."""
        client = self._client
        form = client.clean_params(
            {"id": asset_id, "text": text, "type": type, "context": context, "notes": notes}
        )
        resp = client.session(api_key).post(client.make_url("/api/assets"), form=form)
        client.ensure_ok(resp, f"assets.create[{asset_id}]")
        return _parse_asset(client.json_dict(resp), asset_id)

    def patch(
        self,
        api_key: ApiKey,
        asset_id: AssetId,
        *,
        type: Optional[str] = None,
        name: Optional[str] = None,
        context: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> RemoteAsset:
        """Update asset properties; only the given fields are sent."""
        client = self._client
        body = client.clean_params({"type": type, "name": name, "context": context, "notes": notes})
        resp = client.session(api_key).patch(
            client.make_url("/api/assets/{}.json", asset_id), json_body=body
        )
        client.ensure_ok(resp, f"assets.patch[{asset_id}]")
        return _parse_asset(client.json_dict(resp), asset_id)

    def tag(self, api_key: ApiKey, asset_id: AssetId, tag: str) -> None:
        client = self._client
        resp = client.session(api_key).post(
            client.make_url("/api/assets/{}/tags", asset_id), form={"name": tag}
        )
        client.ensure_ok(resp, f"assets.tag[{asset_id}]")


class TranslationsApi(_ResourceApi):
    """Translations of one asset in one locale."""

    def get(self, api_key: ApiKey, asset_id: AssetId, locale: Locale) -> RemoteTranslation:
        client = self._client
        resp = client.session(api_key).get(
            client.make_url("/api/translations/{}/{}", asset_id, locale)
        )
        client.ensure_ok(resp, f"translations.get[{asset_id}/{locale}]")
        return _parse_translation(client.json_dict(resp), asset_id, locale)

    def create(
        self, api_key: ApiKey, asset_id: AssetId, locale: Locale, translation: str
    ) -> RemoteTranslation:
        """Write a translation; Loco treats this as an upsert for existing assets."""
        client = self._client
        resp = client.session(api_key).post(
            client.make_url("/api/translations/{}/{}", asset_id, locale),
            body=translation,
        )
        client.ensure_ok(resp, f"translations.create[{asset_id}/{locale}]")
        return _parse_translation(client.json_dict(resp), asset_id, locale)

    def delete(self, api_key: ApiKey, asset_id: AssetId, locale: Locale) -> None:
        client = self._client
        resp = client.session(api_key).delete(
            client.make_url("/api/translations/{}/{}", asset_id, locale)
        )
        client.ensure_ok(resp, f"translations.delete[{asset_id}/{locale}]")


class ExportApi(_ResourceApi):
    def locale(
        self, api_key: ApiKey, locale: Locale, ext: str, params: Mapping[str, Any]
    ) -> str:
        """Export one locale as a file of type ``ext`` and return its text."""
        client = self._client
        resp = client.session(api_key).get(
            client.make_url("/api/export/locale/{}.{}", locale, ext),
            params=client.clean_params(params),
            accept="*/*",
        )
        client.ensure_ok(resp, f"export.locale[{locale}.{ext}]")
        return resp.text


class ImportApi(_ResourceApi):
    def import_content(
        self, api_key: ApiKey, ext: str, data: str, params: Mapping[str, Any]
    ) -> ImportResult:
        """Upload a file of type ``ext``; async imports return a progress URL."""
        client = self._client
        resp = client.session(api_key).post(
            client.make_url("/api/import/{}", ext),
            params=client.clean_params(params),
            body=data,
        )
        client.ensure_ok(resp, f"import[{ext}]")
        payload = client.json_dict(resp)
        headers = getattr(resp, "headers", None) or {}
        return ImportResult(
            status=int(payload.get("status") or resp.status_code),
            message=str(payload.get("message") or ""),
            progress_url=str(headers.get("Location") or payload.get("progress") or ""),
        )


def _parse_asset(payload: Mapping[str, Any], asset_id: AssetId) -> RemoteAsset:
    tags = payload.get("tags") or ()
    return RemoteAsset(
        id=str(payload.get("id") or asset_id),
        type=str(payload.get("type") or "text"),
        context=str(payload.get("context") or ""),
        notes=str(payload.get("notes") or ""),
        tags=tuple(str(tag) for tag in tags),
    )


def _parse_translation(
    payload: Mapping[str, Any], asset_id: AssetId, locale: Locale
) -> RemoteTranslation:
    return RemoteTranslation(
        asset_id=str(payload.get("id") or asset_id),
        locale=locale,
        translation=str(payload.get("translation") or ""),
        status=str(payload.get("status") or ""),
        revision=int(payload.get("revision") or 0),
        flagged=bool(payload.get("flagged")),
    )


__all__ = ["AssetsApi", "ExportApi", "ImportApi", "LocoClient", "TranslationsApi"]
