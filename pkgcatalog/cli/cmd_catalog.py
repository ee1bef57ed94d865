"""CLI - 目录编译与资源查询命令"""

from __future__ import annotations

import json
import sys

import click

from pkgcatalog.core.catalog import Catalog
from pkgcatalog.core.config import get_config
from pkgcatalog.core.exceptions import CatalogError
from pkgcatalog.core.loader import load_catalog
from pkgcatalog.core.pkg import autorequire
from pkgcatalog.core.pkg.schema import describe
from pkgcatalog.utils.yaml_io import save_yaml


def register(group: click.Group) -> None:
    group.add_command(compile_catalog)
    group.add_command(show_edges)
    group.add_command(list_attrs)


def _fail(err: CatalogError) -> None:
    click.secho(f"[{err.code}] {err}", fg="red", err=True)
    sys.exit(1)


def _load(catalog_file: str | None) -> Catalog:
    return load_catalog(catalog_file or get_config().catalog_file)


@click.command(name="compile")
@click.argument("catalog_file", required=False)
@click.option("--output", "-o", default=None, help="导出依赖关系和落地顺序到 YAML 文件")
@click.option("--json", "as_json", is_flag=True, help="以 JSON 输出")
def compile_catalog(catalog_file: str | None, output: str | None, as_json: bool) -> None:
    """编译目录：推导依赖并校验所有安装包"""
    try:
        compiled = _load(catalog_file).compile(catalog_present=True)
    except CatalogError as e:
        _fail(e)
        return

    result = compiled.to_dict()
    output = output or get_config().output_file
    if output:
        save_yaml(output, result)

    if as_json:
        click.echo(json.dumps(result, indent=2, ensure_ascii=False))
        return

    click.echo(f"已编译 {len(compiled.resources)} 个安装包")
    if compiled.relationships:
        click.echo("依赖关系:")
        for rel in compiled.relationships:
            click.echo(f"  {rel.source} -> {rel.target}")
    click.echo("落地顺序:")
    for i, ref in enumerate(result["apply_order"], 1):
        click.echo(f"  {i:3d}. {ref}")
    if output:
        click.echo(f"已导出到: {output}")


@click.command(name="edges")
@click.argument("name")
@click.option("--catalog", "catalog_file", default=None, help="目录文件路径")
def show_edges(name: str, catalog_file: str | None) -> None:
    """查看单个安装包的自动依赖（不做校验）"""
    try:
        catalog = _load(catalog_file)
        resource = catalog.package(name)
    except CatalogError as e:
        _fail(e)
        return

    attached = set(catalog.attached_edges(resource))
    for edge in autorequire(resource):
        mark = "attached" if edge in attached else "dropped"
        click.echo(f"  [{mark:8s}] {edge.ref}")


@click.command(name="attrs")
def list_attrs() -> None:
    """列出安装包资源的全部属性"""
    for a in describe():
        default = a["default"] or "-"
        click.echo(f"  {a['name']:20s} {a['kind']:8s} {default:8s}  {a['description']}")
