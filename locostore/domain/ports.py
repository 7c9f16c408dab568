from __future__ import annotations
from typing import Any, Dict, Mapping, Optional, Protocol

from .catalogue import MessageCatalogue
from .message import Message
from .remote_models import ImportResult, RemoteAsset, RemoteTranslation

ApiKey = str
AssetId = str
Locale = str


# ---- Inbound ports (implemented by storage adapters) ----
class Storage(Protocol):
    """Single-message CRUD against a translation backend."""

    def get(self, locale: Locale, domain: str, key: str) -> Optional[Message]: ...
    def create(self, message: Message) -> None: ...
    def update(self, message: Message) -> None: ...
    def delete(self, locale: Locale, domain: str, key: str) -> None: ...


class TransferableStorage(Protocol):
    """Bulk transfer of whole catalogues."""

    def export(
        self, catalogue: MessageCatalogue, options: Optional[Dict[str, Any]] = None
    ) -> None: ...  # remote -> catalogue
    def import_(
        self, catalogue: MessageCatalogue, options: Optional[Dict[str, Any]] = None
    ) -> None: ...  # catalogue -> remote


# ---- Outbound ports (Loco API, grouped by resource) ----
# Failures raise ApiError whose ``kind`` is a RemoteErrorKind.
class AssetsPort(Protocol):
    def create(
        self,
        api_key: ApiKey,
        asset_id: AssetId,
        *,
        text: Optional[str] = None,
        type: Optional[str] = None,
        context: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> RemoteAsset: ...
    def patch(
        self,
        api_key: ApiKey,
        asset_id: AssetId,
        *,
        type: Optional[str] = None,
        name: Optional[str] = None,
        context: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> RemoteAsset: ...
    def tag(self, api_key: ApiKey, asset_id: AssetId, tag: str) -> None: ...


class TranslationsPort(Protocol):
    def get(self, api_key: ApiKey, asset_id: AssetId, locale: Locale) -> RemoteTranslation: ...
    def create(
        self, api_key: ApiKey, asset_id: AssetId, locale: Locale, translation: str
    ) -> RemoteTranslation: ...
    def delete(self, api_key: ApiKey, asset_id: AssetId, locale: Locale) -> None: ...


class ExportPort(Protocol):
    def locale(
        self, api_key: ApiKey, locale: Locale, ext: str, params: Mapping[str, Any]
    ) -> str: ...  # raw file content


class ImportPort(Protocol):
    def import_content(
        self, api_key: ApiKey, ext: str, data: str, params: Mapping[str, Any]
    ) -> ImportResult: ...


class LocoClientPort(Protocol):
    """Loco REST API, one resource group per attribute."""

    assets: AssetsPort
    translations: TranslationsPort
    exports: ExportPort
    imports: ImportPort
