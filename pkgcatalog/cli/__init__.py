"""pkgcatalog 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os

import click

from pkgcatalog import __version__
from pkgcatalog.core.config import DEFAULT_CONFIG_FILE, init_config
from pkgcatalog.utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", "config_path", default=DEFAULT_CONFIG_FILE, help="配置文件路径")
def main(config_path: str) -> None:
    """pkgcatalog - 安装包资源目录编译与校验"""
    cfg = init_config(config_path)
    setup_logging(
        level=os.getenv("PKGCATALOG_LOG_LEVEL", str(cfg.log_level)),
        json_output=os.getenv("PKGCATALOG_LOG_JSON", "1" if cfg.log_json else "") == "1",
    )


# 注册各领域子命令
from pkgcatalog.cli.cmd_catalog import register as _reg_catalog  # noqa: E402

_reg_catalog(main)
