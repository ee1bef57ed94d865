"""安装包资源数据模型

数据类:
- Ensure: 期望状态
- PackageResource: 单个安装包资源（只读）
- Edge: 自动依赖边 (kind, key)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, NamedTuple

RESOURCE_TYPE = "package"
DEFAULT_USER = "root"
BOOTSTRAP_EXEC = "Install Installation Manager"


class Ensure(str, Enum):
    """资源期望状态"""

    PRESENT = "present"
    ABSENT = "absent"


def entity_ref(kind: str, key: str) -> str:
    """实体引用字符串，如 User[root]"""
    return f"{kind.capitalize()}[{key}]"


class Edge(NamedTuple):
    """指向目录中另一实体的排序提示"""

    kind: str
    key: str

    @property
    def ref(self) -> str:
        return entity_ref(self.kind, self.key)


@dataclass(frozen=True)
class PackageResource:
    """单个安装包资源

    由 schema.build() 构造，编译期校验后只读交给 provider。
    """

    name: str
    ensure: Ensure = Ensure.PRESENT
    package: str | None = None
    version: str | None = None
    target: str | None = None
    repository: str | None = None
    response: str | None = None
    imcl_path: str | None = None
    jdk_package_name: str | None = None
    jdk_package_version: str | None = None
    options: str | None = None
    user: str = DEFAULT_USER
    manage_ownership: bool = True
    package_owner: str = DEFAULT_USER
    package_group: str = DEFAULT_USER

    @property
    def ref(self) -> str:
        """展示名，如 Package[was9]"""
        return entity_ref(RESOURCE_TYPE, self.name)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["ensure"] = self.ensure.value
        return data
