from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

import pytest

from locostore.adapters.api_errors import ApiClientError, ApiServerError
from locostore.domain.remote_models import ImportResult, RemoteAsset, RemoteTranslation


def _not_found(ctx: str) -> ApiClientError:
    return ApiClientError(f"{ctx}: not found (HTTP 404)", status=404, context=ctx)


class FakeLocoClient:
    """In-memory Loco API recording every call in order.

    ``assets`` holds (api_key, asset_id); ``values`` maps
    (api_key, asset_id, locale) to translations; ``exports`` maps
    (api_key, locale, filter) to XLIFF text. ``server_errors`` names
    operations that fail with HTTP 500.
    """

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.known_assets: Set[Tuple[str, str]] = set()
        self.values: Dict[Tuple[str, str, str], str] = {}
        self.export_payloads: Dict[Tuple[str, str, Optional[str]], str] = {}
        self.server_errors: Set[str] = set()

        self.assets = _Assets(self)
        self.translations = _Translations(self)
        self.exports = _Exports(self)
        self.imports = _Imports(self)

    def record(self, op: str, **kwargs: Any) -> None:
        self.calls.append({"op": op, **kwargs})
        if op in self.server_errors:
            raise ApiServerError(f"{op}: boom (HTTP 500)", status=500, context=op)

    def ops(self) -> List[str]:
        return [call["op"] for call in self.calls]

    def calls_for(self, op: str) -> List[Dict[str, Any]]:
        return [call for call in self.calls if call["op"] == op]


class _Assets:
    def __init__(self, fake: FakeLocoClient) -> None:
        self.fake = fake

    def create(self, api_key: str, asset_id: str, **fields: Any) -> RemoteAsset:
        self.fake.record("assets.create", api_key=api_key, asset_id=asset_id, **fields)
        if (api_key, asset_id) in self.fake.known_assets:
            raise ApiClientError("assets.create: conflict (HTTP 409)", status=409)
        self.fake.known_assets.add((api_key, asset_id))
        return RemoteAsset(id=asset_id)

    def patch(self, api_key: str, asset_id: str, **fields: Any) -> RemoteAsset:
        self.fake.record("assets.patch", api_key=api_key, asset_id=asset_id, **fields)
        if (api_key, asset_id) not in self.fake.known_assets:
            raise _not_found("assets.patch")
        return RemoteAsset(id=asset_id, notes=fields.get("notes") or "")

    def tag(self, api_key: str, asset_id: str, tag: str) -> None:
        self.fake.record("assets.tag", api_key=api_key, asset_id=asset_id, tag=tag)


class _Translations:
    def __init__(self, fake: FakeLocoClient) -> None:
        self.fake = fake

    def get(self, api_key: str, asset_id: str, locale: str) -> RemoteTranslation:
        self.fake.record("translations.get", api_key=api_key, asset_id=asset_id, locale=locale)
        value = self.fake.values.get((api_key, asset_id, locale))
        if value is None:
            raise _not_found("translations.get")
        return RemoteTranslation(asset_id=asset_id, locale=locale, translation=value)

    def create(
        self, api_key: str, asset_id: str, locale: str, translation: str
    ) -> RemoteTranslation:
        self.fake.record(
            "translations.create",
            api_key=api_key,
            asset_id=asset_id,
            locale=locale,
            translation=translation,
        )
        if (api_key, asset_id) not in self.fake.known_assets:
            raise _not_found("translations.create")
        self.fake.values[(api_key, asset_id, locale)] = translation
        return RemoteTranslation(asset_id=asset_id, locale=locale, translation=translation)

    def delete(self, api_key: str, asset_id: str, locale: str) -> None:
        self.fake.record("translations.delete", api_key=api_key, asset_id=asset_id, locale=locale)
        if self.fake.values.pop((api_key, asset_id, locale), None) is None:
            raise _not_found("translations.delete")


class _Exports:
    def __init__(self, fake: FakeLocoClient) -> None:
        self.fake = fake

    def locale(self, api_key: str, locale: str, ext: str, params: Mapping[str, Any]) -> str:
        self.fake.record("export.locale", api_key=api_key, locale=locale, ext=ext, params=dict(params))
        payload = self.fake.export_payloads.get((api_key, locale, params.get("filter")))
        if payload is None:
            raise _not_found("export.locale")
        return payload


class _Imports:
    def __init__(self, fake: FakeLocoClient) -> None:
        self.fake = fake

    def import_content(
        self, api_key: str, ext: str, data: str, params: Mapping[str, Any]
    ) -> ImportResult:
        self.fake.record("import", api_key=api_key, ext=ext, data=data, params=dict(params))
        return ImportResult(status=201, message="queued", progress_url="/api/import/progress/1")


@pytest.fixture
def fake_client() -> FakeLocoClient:
    return FakeLocoClient()
