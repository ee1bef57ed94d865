"""目录文件加载

职责:
- 从 YAML 目录文件加载实体定义
- 支持 files / users / groups / execs 四个普通实体段和 packages 段

普通实体段可以是键列表，也可以是 键 -> 属性 的映射。
packages 段为 名称 -> 属性 的映射，属性体里的 name 可省略。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from pkgcatalog.core.catalog import Catalog
from pkgcatalog.core.exceptions import ConfigError, SchemaError
from pkgcatalog.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

ENTITY_SECTIONS: dict[str, str] = {
    "files": "file",
    "users": "user",
    "groups": "group",
    "execs": "exec",
}


def _entity_key(section: str, key: Any) -> str:
    """实体键只接受字符串，数字按字符串处理"""
    if isinstance(key, str):
        return key
    if isinstance(key, (int, float)) and not isinstance(key, bool):
        return str(key)
    raise ConfigError(f"{section}: invalid entity key {key!r}")


def _load_entities(catalog: Catalog, section: str, kind: str, entries: Any) -> None:
    if isinstance(entries, list):
        for key in entries:
            catalog.add(kind, _entity_key(section, key))
    elif isinstance(entries, dict):
        for key, attrs in entries.items():
            name = _entity_key(section, key)
            if attrs is not None and not isinstance(attrs, dict):
                raise ConfigError(f"{section}.{name}: attributes must be a mapping")
            catalog.add(kind, name, attrs)
    else:
        raise ConfigError(f"{section} must be a list or a mapping")


def _load_packages(catalog: Catalog, entries: Any) -> None:
    if not isinstance(entries, dict):
        raise ConfigError("packages must be a mapping of name -> attributes")
    for name, body in entries.items():
        if body is None:
            body = {}
        if not isinstance(body, dict):
            raise SchemaError(
                f"package '{name}': attributes must be a mapping, got {type(body).__name__}"
            )
        if "name" in body and body["name"] != name:
            raise SchemaError(
                f"package '{name}': name attribute '{body['name']}' does not match its key"
            )
        catalog.add_package({**body, "name": str(name)})


def load_catalog(path: str | Path) -> Catalog:
    """从 YAML 目录文件构建 Catalog

    异常:
        ConfigError: 文件不存在、YAML 语法错误或段结构错误
        SchemaError: 安装包属性结构错误
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"catalog file not found: {p}")
    try:
        data = load_yaml(p)
    except (yaml.YAMLError, ValueError, OSError) as e:
        raise ConfigError(f"cannot read catalog file {p}: {e}") from e

    unknown = sorted(str(k) for k in data if k not in ENTITY_SECTIONS and k != "packages")
    if unknown:
        logger.warning("忽略未知的目录段: %s", unknown)

    catalog = Catalog()
    for section, kind in ENTITY_SECTIONS.items():
        entries = data.get(section)
        if entries:
            _load_entities(catalog, section, kind, entries)
    _load_packages(catalog, data.get("packages") or {})

    logger.info("已加载目录 %s: %d 个实体", p, len(catalog))
    return catalog
