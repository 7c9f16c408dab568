import json

import pytest

from locostore.adapters.settings_local import SettingsLocal, api_key_env_var
from locostore.domain.errors import StorageError
from locostore.domain.settings import DEFAULT_BASE_URL


def _write(tmp_path, payload):
    (tmp_path / "locostore.json").write_text(json.dumps(payload), encoding="utf-8")


def test_missing_file_yields_defaults(tmp_path):
    settings = SettingsLocal(root_dir=str(tmp_path), environ={}).load()

    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.request_timeout_s == 10
    assert settings.retries == 2
    assert settings.projects == ()


def test_load_projects_in_file_order(tmp_path):
    _write(
        tmp_path,
        {
            "request_timeout_s": 30,
            "retries": 0,
            "projects": {
                "website": {"api_key": "k-web", "domains": ["messages", "validators"], "index_parameter": "id"},
                "admin": {"api_key": "k-admin", "status": "translated", "multi_domain": True},
            },
        },
    )

    settings = SettingsLocal(root_dir=str(tmp_path), environ={}).load()

    website, admin = settings.projects
    assert settings.request_timeout_s == 30
    assert settings.retries == 0
    assert website.domains == ("messages", "validators")
    assert website.index_parameter == "id"
    assert website.is_multi_domain
    assert admin.domains == ("admin",)
    assert admin.status == "translated"
    assert admin.is_multi_domain


def test_environment_overrides_base_url_and_keys(tmp_path):
    _write(tmp_path, {"base_url": "https://file.test", "projects": {"my-app": {"domains": ["messages"]}}})
    environ = {
        "LOCOSTORE_BASE_URL": "https://env.test",
        "LOCOSTORE_API_KEY_MY_APP": "k-env",
    }

    settings = SettingsLocal(root_dir=str(tmp_path), environ=environ).load()

    assert settings.base_url == "https://env.test"
    assert settings.projects[0].api_key == "k-env"


def test_project_without_api_key_is_rejected(tmp_path):
    _write(tmp_path, {"projects": {"website": {"domains": ["messages"]}}})

    with pytest.raises(StorageError) as excinfo:
        SettingsLocal(root_dir=str(tmp_path), environ={}).load()

    assert "LOCOSTORE_API_KEY_WEBSITE" in str(excinfo.value)


def test_invalid_json_is_reported(tmp_path):
    (tmp_path / "locostore.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        SettingsLocal(root_dir=str(tmp_path), environ={}).load()


def test_load_raw_returns_file_payload(tmp_path):
    payload = {"base_url": "https://loco.test", "projects": {"app": {"api_key": "k"}}}
    _write(tmp_path, payload)

    storage = SettingsLocal(root_dir=str(tmp_path), environ={})

    assert storage.load_raw() == payload
    assert not hasattr(storage, "save_raw")


def test_api_key_env_var_normalizes_names():
    assert api_key_env_var("my app.v2") == "LOCOSTORE_API_KEY_MY_APP_V2"
