"""Project configuration for the Loco storage adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

IndexParameter = Optional[str]

# Loco indexes assets by opaque id or by source text.
INDEX_BY_ID = "id"
INDEX_BY_TEXT = "text"


@dataclass(frozen=True)
class LocoProject:
    """One Loco project and the translation domains it owns.

    Attributes:
        name: Project label used in configuration and logs.
        api_key: Full-access API key of the Loco project.
        domains: Owned domains, in configuration order. Defaults to ``(name,)``.
        index_parameter: Remote indexing mode (``"id"`` or ``"text"``).
        status: Optional export status filter (e.g. ``"translated"``).
        multi_domain: Explicit multi-domain flag; derived from ``domains``
            when left as ``None``.
    """

    name: str
    api_key: str
    domains: Tuple[str, ...] = ()
    index_parameter: IndexParameter = None
    status: Optional[str] = None
    multi_domain: Optional[bool] = None

    def __post_init__(self) -> None:
        domains = tuple(str(domain) for domain in self.domains if str(domain).strip())
        object.__setattr__(self, "domains", domains or (self.name,))

    @classmethod
    def from_config(
        cls,
        name: str,
        *,
        api_key: str,
        domains: Iterable[str] = (),
        index_parameter: IndexParameter = None,
        status: Optional[str] = None,
        multi_domain: Optional[bool] = None,
    ) -> "LocoProject":
        return cls(
            name=name,
            api_key=api_key,
            domains=tuple(domains or ()),
            index_parameter=index_parameter,
            status=status,
            multi_domain=multi_domain,
        )

    @property
    def is_multi_domain(self) -> bool:
        """Return whether domain membership is expressed through remote tags."""
        if self.multi_domain is not None:
            return bool(self.multi_domain)
        return len(self.domains) > 1

    def has_domain(self, domain: str) -> bool:
        return domain in self.domains


__all__ = ["INDEX_BY_ID", "INDEX_BY_TEXT", "IndexParameter", "LocoProject"]
