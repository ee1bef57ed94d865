"""安装包资源模块

拆分说明:
- models.py: 数据模型与常量
- schema.py: 属性表与构造
- validator.py: 跨字段校验
- autorequire.py: 自动依赖推导
"""

from pkgcatalog.core.pkg.autorequire import autorequire
from pkgcatalog.core.pkg.models import (
    BOOTSTRAP_EXEC,
    DEFAULT_USER,
    Edge,
    Ensure,
    PackageResource,
)
from pkgcatalog.core.pkg.schema import ATTRIBUTES, build
from pkgcatalog.core.pkg.validator import validate

__all__ = [
    "ATTRIBUTES",
    "BOOTSTRAP_EXEC",
    "DEFAULT_USER",
    "Edge",
    "Ensure",
    "PackageResource",
    "autorequire",
    "build",
    "validate",
]
