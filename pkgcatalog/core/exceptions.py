"""统一异常体系

所有业务异常继承 CatalogError。
CLI 层据此输出错误码和友好提示，编译流程据此中止。
"""

from __future__ import annotations


class CatalogError(Exception):
    """目录编译基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(CatalogError):
    """配置文件或目录文件缺失、内容无效"""

    code = "CONFIG_ERROR"


class SchemaError(CatalogError):
    """原始属性结构错误（未知属性名、类型不符）"""

    code = "SCHEMA_ERROR"


class DuplicateEntityError(CatalogError):
    """目录中出现重复的实体键"""

    code = "DUPLICATE_ENTITY"


class ValidationError(CatalogError):
    """跨字段不变量校验失败

    resource: 资源展示名，如 Package[was9]
    rule: 被违反的规则标识
    details: 涉及的字段名
    """

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        details: list[str] | None = None,
        *,
        resource: str = "",
        rule: str = "",
    ) -> None:
        super().__init__(message)
        self.details = details or []
        self.resource = resource
        self.rule = rule
