"""安装包资源属性表

职责:
- 以静态表声明全部属性（名称、类型、默认值、说明、绝对路径约束）
- 从原始属性映射构造带默认值的 PackageResource

这里只做结构校验（未知属性、基本类型），跨字段规则由 validator 负责。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pkgcatalog.core.exceptions import SchemaError
from pkgcatalog.core.pkg.models import DEFAULT_USER, Ensure, PackageResource

logger = logging.getLogger(__name__)

STRING = "string"
PATH = "path"
BOOLEAN = "boolean"
ENUM = "enum"

_TRUE_WORDS = frozenset(("true", "yes"))
_FALSE_WORDS = frozenset(("false", "no"))


@dataclass(frozen=True)
class Attribute:
    """单个属性声明"""

    name: str
    kind: str = STRING
    default: Any = None
    description: str = ""
    absolute: bool = False  # 设置时必须为绝对路径
    namevar: bool = False


ATTRIBUTES: tuple[Attribute, ...] = (
    Attribute("name", namevar=True,
              description="Arbitrary name identifying the resource in the catalog."),
    Attribute("ensure", ENUM, Ensure.PRESENT,
              description="Whether the package should be present or absent."),
    Attribute("jdk_package_name",
              description="Name of a separately installed JDK package, when the product needs one."),
    Attribute("jdk_package_version",
              description="Version of the separately installed JDK package."),
    Attribute("imcl_path", PATH, absolute=True,
              description="Full path to the imcl executable; located automatically when omitted."),
    Attribute("target", PATH, absolute=True,
              description="Installation directory for the package."),
    Attribute("package",
              description="Package identifier, the part of the full name before the first underscore."),
    Attribute("repository", PATH,
              description="Path to the repository.config describing the installable packages."),
    Attribute("response", PATH, absolute=True,
              description="Response file to install from instead of package/version/target/repository."),
    Attribute("version",
              description="Package version, the part of the full name after the first underscore."),
    Attribute("options",
              description="Extra options passed through to the installer unchanged."),
    Attribute("user", default=DEFAULT_USER,
              description="Account the installer runs as."),
    Attribute("manage_ownership", BOOLEAN, True,
              description="Whether ownership of the installed files is managed."),
    Attribute("package_owner", default=DEFAULT_USER,
              description="Owner of the installation; used only when manage_ownership is true."),
    Attribute("package_group", default=DEFAULT_USER,
              description="Group of the installation; used only when manage_ownership is true."),
)

ATTRIBUTES_BY_NAME: dict[str, Attribute] = {a.name: a for a in ATTRIBUTES}

# 按属性表顺序: imcl_path, target, response
ABSOLUTE_PATH_ATTRIBUTES: tuple[str, ...] = tuple(a.name for a in ATTRIBUTES if a.absolute)


def _coerce_bool(attr: Attribute, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise SchemaError(f"{attr.name} must be a boolean, got {value!r}")


def _coerce_string(attr: Attribute, value: Any) -> str:
    if isinstance(value, str):
        return value
    # YAML 会把 9.0 之类的版本号解析成数字
    if attr.name == "version" and isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise SchemaError(
        f"{attr.name} must be a string, got {type(value).__name__}: {value!r}"
    )


def _coerce_ensure(attr: Attribute, value: Any) -> Ensure:
    if isinstance(value, Ensure):
        return value
    try:
        return Ensure(value)
    except ValueError:
        choices = ", ".join(e.value for e in Ensure)
        raise SchemaError(
            f"{attr.name} must be one of {choices}, got {value!r}"
        ) from None


def _coerce(attr: Attribute, value: Any) -> Any:
    if attr.kind == BOOLEAN:
        return _coerce_bool(attr, value)
    if attr.kind == ENUM:
        return _coerce_ensure(attr, value)
    return _coerce_string(attr, value)


def build(raw: Mapping[str, Any]) -> PackageResource:
    """从原始属性构造 PackageResource，未提供的属性取默认值

    异常:
        SchemaError: 输入不是映射、属性名未知、类型不符或缺少 name
    """
    if not isinstance(raw, Mapping):
        raise SchemaError(
            f"resource attributes must be a mapping, got {type(raw).__name__}"
        )

    data = dict(raw)
    if "state" in data:
        if "ensure" in data:
            raise SchemaError("state is an alias of ensure; give only one of them")
        data["ensure"] = data.pop("state")

    unknown = sorted(str(k) for k in data if k not in ATTRIBUTES_BY_NAME)
    if unknown:
        raise SchemaError(
            f"unknown attribute(s) {unknown}; valid: {list(ATTRIBUTES_BY_NAME)}"
        )

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise SchemaError(f"name must be a non-empty string, got {name!r}")

    values: dict[str, Any] = {}
    for attr in ATTRIBUTES:
        value = data.get(attr.name)
        # None 视为未设置，回落到默认值
        values[attr.name] = attr.default if value is None else _coerce(attr, value)

    resource = PackageResource(**values)
    logger.debug("已构造资源: %s", resource.ref)
    return resource


def describe() -> list[dict[str, str]]:
    """格式化属性表用于展示"""
    results = []
    for a in ATTRIBUTES:
        default = a.default
        if isinstance(default, Ensure):
            default = default.value
        elif isinstance(default, bool):
            default = str(default).lower()
        results.append({
            "name": a.name,
            "kind": a.kind,
            "default": "" if default is None else str(default),
            "description": a.description,
        })
    return results
