"""Typed domain objects for Loco API payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class RemoteTranslation:
    """Translation of one asset in one locale, normalized by the client."""

    asset_id: str
    locale: str
    translation: str = ""
    status: str = ""
    revision: int = 0
    flagged: bool = False

    @property
    def translated(self) -> bool:
        return bool(self.translation)


@dataclass(frozen=True)
class RemoteAsset:
    """Asset record (locale independent key) returned by asset endpoints."""

    id: str
    type: str = "text"
    context: str = ""
    notes: str = ""
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ImportResult:
    """Response of a bulk import; async imports only report progress."""

    status: int = 0
    message: str = ""
    progress_url: str = ""

    @property
    def is_async(self) -> bool:
        return bool(self.progress_url)


__all__ = ["ImportResult", "RemoteAsset", "RemoteTranslation"]
