
from __future__ import annotations
import json, os, re
from typing import Any, Dict, List, Mapping, Optional

from locostore.domain.errors import StorageError
from locostore.domain.project import LocoProject
from locostore.domain.settings import DEFAULT_BASE_URL, LocoSettings

SETTINGS_FILE = "locostore.json"
_ENV_BASE_URL = "LOCOSTORE_BASE_URL"
_ENV_KEY_PREFIX = "LOCOSTORE_API_KEY_"
_ENV_NAME_PATTERN = re.compile(r"[^A-Z0-9]+")


def api_key_env_var(project_name: str) -> str:
    """Environment variable holding the API key of ``project_name``."""
    return _ENV_KEY_PREFIX + _ENV_NAME_PATTERN.sub("_", project_name.upper()).strip("_")


class SettingsLocal:
    """Local filesystem settings (JSON) with environment overrides."""

    def __init__(self, root_dir: str = ".", environ: Optional[Mapping[str, str]] = None) -> None:
        self.root = root_dir
        self.environ = os.environ if environ is None else environ

    @property
    def path(self) -> str:
        return os.path.join(self.root, SETTINGS_FILE)

    def load_raw(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as exc:
                raise StorageError(f"Invalid settings file {self.path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise StorageError(f"Invalid settings file {self.path}: expected an object")
        return payload

    def load(self) -> LocoSettings:
        raw = self.load_raw()
        base_url = self.environ.get(_ENV_BASE_URL) or raw.get("base_url") or DEFAULT_BASE_URL
        projects = self._projects(raw.get("projects") or {})
        return LocoSettings(
            base_url=str(base_url),
            request_timeout_s=int(raw.get("request_timeout_s", 10)),
            retries=int(raw.get("retries", 2)),
            projects=tuple(projects),
        )

    def _projects(self, raw_projects: Any) -> List[LocoProject]:
        if not isinstance(raw_projects, dict):
            raise StorageError('"projects" must map project names to settings')
        projects: List[LocoProject] = []
        # dict order is the resolution order
        for name, cfg in raw_projects.items():
            cfg = cfg if isinstance(cfg, dict) else {}
            api_key = self.environ.get(api_key_env_var(name)) or cfg.get("api_key")
            if not api_key:
                raise StorageError(
                    f'No API key for project "{name}" (set "api_key" or {api_key_env_var(name)})'
                )
            projects.append(
                LocoProject.from_config(
                    name,
                    api_key=str(api_key),
                    domains=cfg.get("domains") or (),
                    index_parameter=cfg.get("index_parameter"),
                    status=cfg.get("status"),
                    multi_domain=cfg.get("multi_domain"),
                )
            )
        return projects
