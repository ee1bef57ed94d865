"""安装包资源跨字段校验

仅在真实目录编译时执行（catalog_present=True），规则按固定顺序检查，
遇到第一条违反即抛出 ValidationError:
  1. 未提供 response 时 target / package / version / repository 必须全部设置
  2. user 必须匹配 [0-9A-Za-z_-]+
  3. imcl_path / target / response 若已设置必须是绝对路径
"""

from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath

from pkgcatalog.core.exceptions import ValidationError
from pkgcatalog.core.pkg.models import PackageResource
from pkgcatalog.core.pkg.schema import ABSOLUTE_PATH_ATTRIBUTES

logger = logging.getLogger(__name__)

RULE_RESPONSE_OR_QUADRUPLET = "response_or_quadruplet"
RULE_USER_PATTERN = "user_pattern"
RULE_ABSOLUTE_PATH = "absolute_path"

QUADRUPLET: tuple[str, ...] = ("target", "package", "version", "repository")

_USER_RE = re.compile(r"[0-9A-Za-z_-]+")


def _fail(resource: PackageResource, rule: str, field: str, message: str) -> ValidationError:
    return ValidationError(
        f"{resource.ref}: {message}",
        details=[field],
        resource=resource.ref,
        rule=rule,
    )


def _check_response_or_quadruplet(resource: PackageResource) -> None:
    if resource.response is not None:
        return
    for field in QUADRUPLET:
        if getattr(resource, field) is None:
            raise _fail(
                resource, RULE_RESPONSE_OR_QUADRUPLET, field,
                f"{field} is required when a response file is not provided",
            )


def _check_user(resource: PackageResource) -> None:
    if not _USER_RE.fullmatch(resource.user):
        raise _fail(resource, RULE_USER_PATTERN, "user", f"Invalid user {resource.user}")


def _check_absolute_paths(resource: PackageResource) -> None:
    for field in ABSOLUTE_PATH_ATTRIBUTES:
        value = getattr(resource, field)
        if value and not PurePosixPath(value).is_absolute():
            raise _fail(
                resource, RULE_ABSOLUTE_PATH, field,
                f"{field} must be an absolute path: {value}",
            )


_RULES = (
    _check_response_or_quadruplet,
    _check_user,
    _check_absolute_paths,
)


def validate(resource: PackageResource, catalog_present: bool) -> None:
    """校验资源，不在目录上下文中时直接跳过

    异常:
        ValidationError: 第一条被违反的规则
    """
    if not catalog_present:
        logger.debug("非目录上下文，跳过校验: %s", resource.ref)
        return
    for rule in _RULES:
        rule(resource)
    logger.debug("校验通过: %s", resource.ref)
