"""Storage adapter backed by the Loco translation platform.

Every operation round-trips to the remote API; nothing is cached locally.
Remote failures are reclassified by ``ApiError.kind``:

- NOT_FOUND is "nothing here" for ``get`` and ``export``, and switches
  ``update`` to the full create flow.
- CONFLICT on asset creation means the asset already exists.
- Everything else propagates unchanged.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, Optional, Tuple

from locostore.domain.catalogue import MessageCatalogue
from locostore.domain.errors import RemoteErrorKind, StorageError
from locostore.domain.message import Message
from locostore.domain.ports import LocoClientPort, Storage, TransferableStorage
from locostore.domain.project import INDEX_BY_ID, LocoProject

from locostore.adapters.api_errors import ApiError
from locostore.adapters.meta_dump import dump_parameters
from locostore.adapters.xliff import catalogue_to_content, content_to_catalogue

EXPORT_FORMAT = "symfony"
FILE_EXTENSION = "xliff"
ID_LOCALE = "x-id"

_EXPORT_SOURCE_PATTERN = re.compile(r"<source>[^.]+\.([^<]*)</source>")
_IMPORT_UNIT_PATTERN = re.compile(r'<unit id="([^"]+)" name="([^"]*)">')


def format_token(domain: str, key: str) -> str:
    """Return the Loco asset id for ``key`` in ``domain``."""
    return f"{domain}.{key}"


def strip_source_prefix(content: str) -> str:
    """Drop the leading ``<prefix>.`` of every exported ``<source>`` value."""
    return _EXPORT_SOURCE_PATTERN.sub(r"<source>\1</source>", content)


def namespace_unit_names(content: str, domain: str) -> str:
    """Prefix every XLIFF 2.0 unit name with ``<domain>.``."""
    return _IMPORT_UNIT_PATTERN.sub(
        lambda match: f'<unit id="{match.group(1)}" name="{domain}.{match.group(2)}">',
        content,
    )


class LocoStorage(Storage, TransferableStorage):
    """Message storage on localise.biz, one Loco project per set of domains."""

    def __init__(self, client: LocoClientPort, projects: Iterable[LocoProject]) -> None:
        self.client = client
        self.projects: Tuple[LocoProject, ...] = tuple(projects)
        self._log = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------
    def get(self, locale: str, domain: str, key: str) -> Optional[Message]:
        project = self.resolve(domain)
        token = format_token(domain, key)
        try:
            remote = self.client.translations.get(project.api_key, token, locale)
        except ApiError as exc:
            if exc.kind is not RemoteErrorKind.NOT_FOUND:
                raise
            self._log.debug("No translation for %s in %s", token, locale)
            return None
        return Message(key=key, domain=domain, locale=locale, translation=remote.translation, meta={})

    def create(self, message: Message) -> None:
        """Create the asset and its translation without clobbering existing work.

        The API has no create-or-update, so a conflicting asset switches to
        check-then-write for the translation.
        """
        project = self.resolve(message.domain)
        token = format_token(message.domain, message.key)
        api_key = project.api_key

        is_new_asset = True
        try:
            self.client.assets.create(api_key, token)
        except ApiError as exc:
            if exc.kind is not RemoteErrorKind.CONFLICT:
                raise
            self._log.debug("Asset %s already exists in project %s", token, project.name)
            is_new_asset = False

        # Untranslated placeholders must not count as translated on Loco.
        translation = "" if message.translation == token else message.translation

        if is_new_asset:
            self.client.translations.create(api_key, token, message.locale, translation)
        else:
            try:
                self.client.translations.get(api_key, token, message.locale)
            except ApiError as exc:
                if exc.kind is not RemoteErrorKind.NOT_FOUND:
                    raise
                self.client.translations.create(api_key, token, message.locale, translation)
            else:
                self._log.debug("Keeping existing %s translation of %s", message.locale, token)

        self.client.assets.tag(api_key, token, message.domain)

        parameters = message.get_meta("parameters")
        if parameters:
            self.client.assets.patch(api_key, token, notes=dump_parameters(parameters))

    def update(self, message: Message) -> None:
        project = self.resolve(message.domain)
        token = format_token(message.domain, message.key)
        try:
            self.client.translations.create(
                project.api_key, token, message.locale, message.translation
            )
        except ApiError as exc:
            if exc.kind is not RemoteErrorKind.NOT_FOUND:
                raise
            self._log.debug("Asset %s missing, falling back to create", token)
            self.create(message)

    def delete(self, locale: str, domain: str, key: str) -> None:
        project = self.resolve(domain)
        self.client.translations.delete(project.api_key, format_token(domain, key), locale)

    # ------------------------------------------------------------------
    # TransferableStorage
    # ------------------------------------------------------------------
    def export(
        self, catalogue: MessageCatalogue, options: Optional[Dict[str, Any]] = None
    ) -> None:
        """Merge every configured domain for ``catalogue.locale`` into ``catalogue``."""
        locale = catalogue.locale
        for project in self.projects:
            for domain in project.domains:
                params: Dict[str, Any] = {
                    "format": EXPORT_FORMAT,
                    "index": project.index_parameter,
                }
                if project.status:
                    params["status"] = project.status
                if project.is_multi_domain:
                    params["filter"] = domain

                try:
                    data = self.client.exports.locale(project.api_key, locale, FILE_EXTENSION, params)
                except ApiError as exc:
                    if exc.kind is not RemoteErrorKind.NOT_FOUND:
                        raise
                    self._log.debug("Nothing to export for %s/%s", project.name, domain)
                    continue

                data = strip_source_prefix(data)
                catalogue.add_catalogue(content_to_catalogue(data, locale, domain))
                self._log.info("Exported %s/%s (%s)", project.name, domain, locale)

    def import_(
        self, catalogue: MessageCatalogue, options: Optional[Dict[str, Any]] = None
    ) -> None:
        """Upload every configured domain of ``catalogue`` to its project."""
        locale = catalogue.locale
        for project in self.projects:
            project_options = dict(options or {})
            if project.index_parameter == INDEX_BY_ID:
                project_options["default_locale"] = ID_LOCALE

            for domain in project.domains:
                data = catalogue_to_content(catalogue, domain, project_options)
                data = namespace_unit_names(data, domain)

                params: Dict[str, Any] = {
                    "locale": locale,
                    "async": 1,
                    "index": project.index_parameter,
                }
                if project.is_multi_domain:
                    params["tag-all"] = domain

                self.client.imports.import_content(project.api_key, FILE_EXTENSION, data, params)
                self._log.info("Imported %s/%s (%s)", project.name, domain, locale)

    # ------------------------------------------------------------------
    def resolve(self, domain: str) -> LocoProject:
        """Return the first project owning ``domain``."""
        for project in self.projects:
            if project.has_domain(domain):
                return project
        raise StorageError(f'Project for "{domain}" domain was not found.')


__all__ = [
    "EXPORT_FORMAT",
    "FILE_EXTENSION",
    "ID_LOCALE",
    "LocoStorage",
    "format_token",
    "namespace_unit_names",
    "strip_source_prefix",
]
