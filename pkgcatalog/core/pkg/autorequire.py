"""自动依赖推导

根据资源属性计算指向目录中其他实体的排序提示:
  - target 已设置: file[target]
  - user[package_owner]
  - group[package_group]
  - exec[Install Installation Manager]（安装器引导步骤，无条件）

这里不关心被引用实体是否存在，也不过滤空键，由目录编译时裁剪。
"""

from __future__ import annotations

from pkgcatalog.core.pkg.models import BOOTSTRAP_EXEC, Edge, PackageResource


def autorequire(resource: PackageResource) -> list[Edge]:
    """返回资源的自动依赖边，顺序固定"""
    edges: list[Edge] = []
    if resource.target:
        edges.append(Edge("file", resource.target))
    edges.append(Edge("user", resource.package_owner))
    edges.append(Edge("group", resource.package_group))
    edges.append(Edge("exec", BOOTSTRAP_EXEC))
    return edges
