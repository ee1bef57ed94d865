"""目录宿主 - 持有实体并驱动一次编译

职责:
- 登记普通实体（file / user / group / exec ...）和安装包资源
- 编译: 对每个安装包依次推导自动依赖、裁剪无效边、校验
- 输出依赖关系和实体的落地顺序

编译是同步、一次性的，不做任何 I/O。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pkgcatalog.core.exceptions import CatalogError, DuplicateEntityError
from pkgcatalog.core.pkg.autorequire import autorequire
from pkgcatalog.core.pkg.models import RESOURCE_TYPE, Edge, PackageResource, entity_ref
from pkgcatalog.core.pkg.schema import build
from pkgcatalog.core.pkg.validator import validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Relationship:
    """排序关系: source 先于 target 落地"""

    source: str
    target: str

    def to_dict(self) -> dict[str, str]:
        return {"before": self.source, "require": self.target}


@dataclass
class CompiledCatalog:
    """编译结果"""

    entities: list[str] = field(default_factory=list)
    resources: list[PackageResource] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)

    def requires(self, ref: str) -> list[str]:
        """列出 ref 需要先落地的实体"""
        return [r.source for r in self.relationships if r.target == ref]

    def apply_order(self) -> list[str]:
        """实体落地顺序（拓扑序，同层保持登记顺序）"""
        deps: dict[str, list[str]] = {ref: [] for ref in self.entities}
        for rel in self.relationships:
            deps.setdefault(rel.target, []).append(rel.source)

        visiting: set[str] = set()
        visited: set[str] = set()
        order: list[str] = []

        def visit(ref: str) -> None:
            if ref in visited:
                return
            if ref in visiting:
                raise CatalogError(f"dependency cycle detected at {ref}")
            visiting.add(ref)
            for dep in deps.get(ref, []):
                visit(dep)
            visiting.remove(ref)
            visited.add(ref)
            order.append(ref)

        for ref in deps:
            visit(ref)
        return order

    def to_dict(self) -> dict[str, Any]:
        return {
            "relationships": [r.to_dict() for r in self.relationships],
            "apply_order": self.apply_order(),
        }


class Catalog:
    """目录 - 以 (kind, key) 为键登记实体"""

    def __init__(self) -> None:
        self._entities: dict[tuple[str, str], dict[str, Any]] = {}
        self._packages: dict[str, PackageResource] = {}

    def add(self, kind: str, key: str, attrs: Mapping[str, Any] | None = None) -> None:
        """登记普通实体"""
        kind = kind.lower()
        if kind == RESOURCE_TYPE:
            raise CatalogError("use add_package() for package resources")
        if not key:
            raise CatalogError(f"{kind} entity key must be non-empty")
        if (kind, key) in self._entities:
            raise DuplicateEntityError(f"duplicate entity {entity_ref(kind, key)}")
        self._entities[(kind, key)] = dict(attrs or {})

    def add_package(self, raw: Mapping[str, Any]) -> PackageResource:
        """从原始属性构造并登记安装包资源

        异常:
            SchemaError: 属性结构错误
            DuplicateEntityError: 同名资源已存在
        """
        resource = build(raw)
        if resource.name in self._packages:
            raise DuplicateEntityError(f"duplicate entity {resource.ref}")
        self._packages[resource.name] = resource
        self._entities[(RESOURCE_TYPE, resource.name)] = resource.to_dict()
        return resource

    def contains(self, kind: str, key: str) -> bool:
        return (kind.lower(), key) in self._entities

    def package(self, name: str) -> PackageResource:
        resource = self._packages.get(name)
        if resource is None:
            raise CatalogError(
                f"package '{name}' not in catalog. available: {list(self._packages)}"
            )
        return resource

    @property
    def packages(self) -> list[PackageResource]:
        return list(self._packages.values())

    def __len__(self) -> int:
        return len(self._entities)

    def attached_edges(self, resource: PackageResource) -> list[Edge]:
        """自动依赖中键非空且实体存在的部分，其余静默丢弃"""
        kept: list[Edge] = []
        for edge in autorequire(resource):
            if edge.key and self.contains(edge.kind, edge.key):
                kept.append(edge)
            else:
                logger.debug("丢弃自动依赖: %s -> %s", resource.ref, edge.ref)
        return kept

    def compile(self, catalog_present: bool = True) -> CompiledCatalog:
        """编译目录，遇到第一个校验失败即中止

        异常:
            ValidationError: 某个安装包违反不变量
        """
        compiled = CompiledCatalog(
            entities=[entity_ref(kind, key) for kind, key in self._entities],
        )
        for resource in self._packages.values():
            # 依赖推导与校验结果无关，先于校验执行
            for edge in self.attached_edges(resource):
                compiled.relationships.append(Relationship(edge.ref, resource.ref))
            validate(resource, catalog_present)
            compiled.resources.append(resource)

        logger.info(
            "目录编译完成: %d 个实体, %d 个安装包, %d 条依赖",
            len(compiled.entities), len(compiled.resources), len(compiled.relationships),
        )
        return compiled
