"""In-memory message catalogue for one locale."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Mapping, Optional

from .message import Message

DEFAULT_DOMAIN = "messages"


class MessageCatalogue:
    """Translations for one locale, grouped by domain.

    The catalogue is owned by the caller; storage adapters read from it on
    import and merge remote content into it on export.
    """

    def __init__(
        self,
        locale: str,
        messages: Optional[Mapping[str, Mapping[str, str]]] = None,
    ) -> None:
        self.locale = locale
        self._messages: Dict[str, Dict[str, str]] = {}
        self._metadata: Dict[str, Dict[str, Dict[str, Any]]] = {}
        for domain, entries in (messages or {}).items():
            self.add(entries, domain)

    def __repr__(self) -> str:
        return f"MessageCatalogue(locale={self.locale!r}, domains={self.domains()!r})"

    # ---- Messages ----
    def domains(self) -> List[str]:
        return list(self._messages.keys())

    def all(self, domain: Optional[str] = None) -> Dict[str, Any]:
        """Return a copy of every message, or of one domain when given."""
        if domain is not None:
            return dict(self._messages.get(domain, {}))
        return {name: dict(entries) for name, entries in self._messages.items()}

    def set(self, key: str, translation: str, domain: str = DEFAULT_DOMAIN) -> None:
        self._messages.setdefault(domain, {})[key] = translation

    def add(self, messages: Mapping[str, str], domain: str = DEFAULT_DOMAIN) -> None:
        self._messages.setdefault(domain, {}).update(messages)

    def has(self, key: str, domain: str = DEFAULT_DOMAIN) -> bool:
        return key in self._messages.get(domain, {})

    def get(self, key: str, domain: str = DEFAULT_DOMAIN) -> str:
        """Return the translation for ``key``; the key itself when missing."""
        return self._messages.get(domain, {}).get(key, key)

    def messages(self, domain: str) -> Iterator[Message]:
        for key, translation in self._messages.get(domain, {}).items():
            yield Message(
                key=key,
                domain=domain,
                locale=self.locale,
                translation=translation,
                meta=dict(self.get_metadata(key, domain) or {}),
            )

    # ---- Metadata ----
    def get_metadata(
        self, key: str = "", domain: str = DEFAULT_DOMAIN
    ) -> Optional[Dict[str, Any]]:
        """Return metadata of one message, or of the whole domain for an empty key."""
        by_key = self._metadata.get(domain, {})
        if not key:
            return {name: dict(meta) for name, meta in by_key.items()}
        meta = by_key.get(key)
        return dict(meta) if meta is not None else None

    def set_metadata(
        self, key: str, value: Mapping[str, Any], domain: str = DEFAULT_DOMAIN
    ) -> None:
        self._metadata.setdefault(domain, {})[key] = dict(value)

    # ---- Merge ----
    def add_catalogue(self, other: "MessageCatalogue") -> None:
        """Merge messages and metadata of ``other`` into this catalogue."""
        if other.locale != self.locale:
            raise ValueError(
                f'Cannot add a catalogue for locale "{other.locale}" '
                f'as the current locale for this catalogue is "{self.locale}"'
            )
        for domain, entries in other._messages.items():
            self.add(entries, domain)
        for domain, by_key in other._metadata.items():
            for key, meta in by_key.items():
                self.set_metadata(key, meta, domain)


__all__ = ["DEFAULT_DOMAIN", "MessageCatalogue"]
