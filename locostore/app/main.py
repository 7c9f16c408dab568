# locostore/app/main.py
from __future__ import annotations
import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

# ---- Adapters ----
from ..adapters.api_errors import ApiError
from ..adapters.loco_client import LocoClient
from ..adapters.loco_storage import LocoStorage
from ..adapters.settings_local import SettingsLocal
from ..adapters.xliff import catalogue_to_content, content_to_catalogue

# ---- Domain ----
from ..domain.catalogue import MessageCatalogue
from ..domain.errors import StorageError
from ..domain.ports import LocoClientPort
from ..domain.settings import LocoSettings
from ..utils.logging import configure_root

_log = logging.getLogger(__name__)

XLIFF_SUFFIX = ".xlf"


def build_storage(
    settings: LocoSettings, client: Optional[LocoClientPort] = None
) -> LocoStorage:
    """Wire a LocoStorage from settings; ``client`` overrides the HTTP client."""
    if client is None:
        client = LocoClient(
            settings.base_url,
            request_timeout_s=settings.request_timeout_s,
            retries=settings.retries,
        )
    return LocoStorage(client, settings.projects)


def download(storage: LocoStorage, locale: str, out_dir: Path) -> List[Path]:
    """Export ``locale`` from Loco and write one XLIFF file per domain."""
    catalogue = MessageCatalogue(locale)
    storage.export(catalogue)
    out_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for domain in catalogue.domains():
        path = out_dir / f"{domain}.{locale}{XLIFF_SUFFIX}"
        path.write_text(catalogue_to_content(catalogue, domain), encoding="utf-8")
        written.append(path)
    return written


def upload(storage: LocoStorage, locale: str, in_dir: Path) -> MessageCatalogue:
    """Read ``<domain>.<locale>.xlf`` files from ``in_dir`` and import them."""
    catalogue = MessageCatalogue(locale)
    suffix = f".{locale}{XLIFF_SUFFIX}"
    for path in sorted(in_dir.glob(f"*{suffix}")):
        domain = path.name[: -len(suffix)]
        content = path.read_text(encoding="utf-8")
        catalogue.add_catalogue(content_to_catalogue(content, locale, domain))
    if not catalogue.domains():
        raise StorageError(f"No *{suffix} files found in {in_dir}")
    storage.import_(catalogue)
    return catalogue


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="locostore", description="Sync translation catalogues with Loco."
    )
    parser.add_argument(
        "--config-dir",
        default=os.environ.get("LOCOSTORE_CONFIG_DIR") or ".",
        help="Directory holding locostore.json (default: $LOCOSTORE_CONFIG_DIR or .)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    down = sub.add_parser("download", help="Export a locale into XLIFF files")
    down.add_argument("--locale", required=True)
    down.add_argument("--out", dest="path", type=Path, required=True)

    up = sub.add_parser("upload", help="Import XLIFF files for a locale")
    up.add_argument("--locale", required=True)
    up.add_argument("--in", dest="path", type=Path, required=True)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parser().parse_args(argv)
    level = configure_root(logging.DEBUG if args.debug else logging.INFO)
    _log.debug("Log level %s", logging.getLevelName(level))

    try:
        settings = SettingsLocal(root_dir=args.config_dir).load()
        storage = build_storage(settings)
        if args.command == "download":
            for path in download(storage, args.locale, args.path):
                _log.info("Wrote %s", path)
        else:
            catalogue = upload(storage, args.locale, args.path)
            _log.info("Uploaded domains: %s", ", ".join(catalogue.domains()))
    except (StorageError, ApiError) as exc:
        _log.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
