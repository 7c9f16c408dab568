"""Typed runtime settings for the Loco storage adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .project import LocoProject

DEFAULT_BASE_URL = "https://localise.biz"


@dataclass(frozen=True)
class LocoSettings:
    """Transport settings plus the immutable project list."""

    base_url: str = DEFAULT_BASE_URL
    request_timeout_s: int = 10
    retries: int = 2
    projects: Tuple[LocoProject, ...] = ()


__all__ = ["DEFAULT_BASE_URL", "LocoSettings"]
