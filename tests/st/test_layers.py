"""分层基础设施测试：exceptions / config / logger / yaml_io"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from pkgcatalog.core.config import Config, get_config, init_config
from pkgcatalog.core.exceptions import (
    CatalogError,
    ConfigError,
    DuplicateEntityError,
    SchemaError,
    ValidationError,
)
from pkgcatalog.utils.logger import JSONFormatter, reset_logging, setup_logging
from pkgcatalog.utils.yaml_io import load_yaml, save_yaml

# =========================================================================
# exceptions.py
# =========================================================================


class TestExceptions:
    @pytest.mark.parametrize("cls", [ConfigError, SchemaError, DuplicateEntityError, ValidationError])
    def test_hierarchy(self, cls: type) -> None:
        assert issubclass(cls, CatalogError)

    @pytest.mark.parametrize(("cls", "code"), [
        (ConfigError, "CONFIG_ERROR"),
        (SchemaError, "SCHEMA_ERROR"),
        (DuplicateEntityError, "DUPLICATE_ENTITY"),
        (ValidationError, "VALIDATION_ERROR"),
    ])
    def test_codes(self, cls: type, code: str) -> None:
        assert cls.code == code

    def test_validation_error_fields(self) -> None:
        e = ValidationError("校验失败", details=["target"], resource="Package[x]", rule="absolute_path")
        assert e.details == ["target"]
        assert e.resource == "Package[x]" and e.rule == "absolute_path"

    def test_validation_error_defaults(self) -> None:
        e = ValidationError("x")
        assert e.details == [] and e.resource == "" and e.rule == ""


# =========================================================================
# config.py
# =========================================================================


class TestConfig:
    def test_default_values(self) -> None:
        cfg = Config()
        assert cfg.catalog_file == "catalog.yml"
        assert cfg.output_file == ""
        assert cfg.log_level == "INFO" and cfg.log_json is False

    def test_from_file_missing(self, tmp_path: Path) -> None:
        cfg = Config.from_file(str(tmp_path / "nonexist.yml"))
        assert cfg.catalog_file == "catalog.yml"

    def test_from_file_with_data(self, tmp_path: Path) -> None:
        f = tmp_path / "cfg.yml"
        save_yaml(f, {"catalog_file": "/etc/site/catalog.yml", "log_level": "DEBUG"})
        cfg = Config.from_file(str(f))
        assert cfg.catalog_file == "/etc/site/catalog.yml"
        assert cfg.log_level == "DEBUG"

    def test_extra_fields(self, tmp_path: Path) -> None:
        f = tmp_path / "cfg.yml"
        save_yaml(f, {"catalog_file": "c.yml", "site": "dc1"})
        cfg = Config.from_file(str(f))
        assert cfg.extra == {"site": "dc1"}

    def test_to_dict(self) -> None:
        d = Config().to_dict()
        assert d["catalog_file"] == "catalog.yml" and d["extra"] == {}

    def test_global_singleton(self, tmp_path: Path) -> None:
        import pkgcatalog.core.config as cfgmod

        cfgmod._current = None
        assert get_config().catalog_file == "catalog.yml"

        f = tmp_path / "init.yml"
        save_yaml(f, {"output_file": "out.yml"})
        init_config(str(f))
        assert get_config().output_file == "out.yml"
        cfgmod._current = None


# =========================================================================
# logger.py
# =========================================================================


class TestLogger:
    def test_json_formatter(self) -> None:
        record = logging.LogRecord("pkgcatalog.x", logging.INFO, __file__, 10, "编译 %s", ("was9",), None)
        data = json.loads(JSONFormatter().format(record))
        assert data["level"] == "INFO"
        assert data["logger"] == "pkgcatalog.x"
        assert data["message"] == "编译 was9"
        assert "exception" not in data

    def test_setup_logging_replaces_handlers(self) -> None:
        setup_logging("DEBUG")
        setup_logging("WARNING", json_output=True)
        root = logging.getLogger()
        try:
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JSONFormatter)
            assert root.level == logging.WARNING
        finally:
            reset_logging()

    def test_unknown_level_falls_back_to_info(self) -> None:
        setup_logging("chatty")
        try:
            assert logging.getLogger().level == logging.INFO
        finally:
            reset_logging()


# =========================================================================
# yaml_io.py
# =========================================================================


class TestYamlIO:
    def test_missing_returns_empty(self, tmp_path: Path) -> None:
        assert load_yaml(tmp_path / "none.yml") == {}

    def test_non_mapping_returns_empty(self, tmp_path: Path) -> None:
        f = tmp_path / "list.yml"
        f.write_text("- a\n- b\n", encoding="utf-8")
        assert load_yaml(f) == {}

    def test_save_creates_parents_and_keeps_order(self, tmp_path: Path) -> None:
        f = tmp_path / "out" / "compiled.yml"
        save_yaml(f, {"relationships": [], "apply_order": ["User[root]"]})
        assert list(load_yaml(f)) == ["relationships", "apply_order"]
