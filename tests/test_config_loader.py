import pytest
from pydantic import ValidationError

from src.catalog.dependencies import build_key_value_store
from src.database.kv_store import InMemoryKeyValueStore
from src.database.redis_store import RedisKeyValueStore
from src.utils.config_loader import load_catalog_config


def test_repository_config_loads_defaults():
    cfg = load_catalog_config(environ={})

    assert cfg.remote.base_url == "http://localhost:3001"
    assert cfg.remote.timeout_seconds == 3.0
    assert cfg.storage.backend == "file"
    assert cfg.storage.products_key == "shopApp_products"
    assert cfg.storage.comments_key == "shopApp_comments"


def test_environment_overrides_yaml(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text("remote:\n  base_url: http://yaml.test\nstorage:\n  backend: file\n", encoding="utf-8")

    cfg = load_catalog_config(
        path,
        environ={
            "CATALOG_API_URL": "http://env.test",
            "CATALOG_API_TIMEOUT": "1.5",
            "CATALOG_STORAGE_BACKEND": "redis",
            "REDIS_URL": "redis://localhost:6379/0",
            "CATALOG_STORAGE_PATH": "  ",
        },
    )

    assert cfg.remote.base_url == "http://env.test"
    assert cfg.remote.timeout_seconds == 1.5
    assert cfg.storage.backend == "redis"
    assert cfg.storage.redis_url == "redis://localhost:6379/0"
    assert cfg.storage.path == "data/local_storage.json"


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")

    cfg = load_catalog_config(path, environ={})

    assert cfg.storage.backend == "file"
    assert cfg.logging.level == "INFO"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog_config(tmp_path / "nope.yml", environ={})


def test_invalid_values_raise(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("remote:\n  timeout_seconds: 0\nstorage:\n  backend: sqlite\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_catalog_config(path, environ={})


def test_redis_url_selects_redis_backend(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text("storage:\n  backend: file\n", encoding="utf-8")

    cfg = load_catalog_config(path, environ={"REDIS_URL": "redis://localhost:6379/0"})

    assert cfg.storage.backend == "redis"
    assert cfg.storage.redis_url == "redis://localhost:6379/0"

    store = build_key_value_store(cfg.storage)
    assert isinstance(store, RedisKeyValueStore)


def test_explicit_backend_wins_over_redis_url(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text("", encoding="utf-8")

    cfg = load_catalog_config(
        path,
        environ={"REDIS_URL": "redis://localhost:6379/0", "CATALOG_STORAGE_BACKEND": "memory"},
    )

    assert cfg.storage.backend == "memory"
    assert isinstance(build_key_value_store(cfg.storage), InMemoryKeyValueStore)
