"""Message value object exchanged through the storage ports."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping


@dataclass(frozen=True)
class Message:
    """One translation of ``key`` in ``domain`` for ``locale``.

    ``meta`` is copied into a read-only mapping and left out of the hash, so
    messages can be used as set members or dict keys.
    """

    key: str
    domain: str
    locale: str
    translation: str
    meta: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", MappingProxyType(dict(self.meta)))

    def get_meta(self, name: str, default: Any = None) -> Any:
        """Return one metadata entry, or ``default`` when absent."""
        return self.meta.get(name, default)


__all__ = ["Message"]
