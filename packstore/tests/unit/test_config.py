from pathlib import Path

import pytest

from packstore.app.config import StoreConfig


def test_from_env_reads_all_settings(tmp_path):
    env = {
        "PACKSTORE_DOCUMENTS_DIR": str(tmp_path),
        "PACKSTORE_APP_NAME": " DemoApp ",
        "PACKSTORE_REQUEST_TIMEOUT_S": "5",
        "PACKSTORE_DOWNLOAD_TIMEOUT_S": "120.5",
        "PACKSTORE_RETRIES": "0",
        "PACKSTORE_EXTRACT_TIMEOUT_S": "30",
    }

    cfg = StoreConfig.from_env(env)

    assert cfg.documents_dir == tmp_path
    assert cfg.app_name == "DemoApp"
    assert cfg.download_timeout_s == 120.5
    assert cfg.extract_timeout_s == 30.0
    http = cfg.http_config()
    assert (http.request_timeout_s, http.download_timeout_s, http.retries) == (5.0, 120.5, 0)


def test_from_env_defaults():
    cfg = StoreConfig.from_env({})

    assert cfg.app_name is None
    assert cfg.documents_dir == Path.home() / "Documents"
    assert cfg.retries == 2
    assert cfg.extract_timeout_s is None


def test_from_env_rejects_bad_numbers():
    with pytest.raises(ValueError, match="PACKSTORE_DOWNLOAD_TIMEOUT_S"):
        StoreConfig.from_env({"PACKSTORE_DOWNLOAD_TIMEOUT_S": "soon"})
