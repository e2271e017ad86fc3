"""
zippack CLI 主入口
"""

import hashlib
import platform
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..registry import known_products
from ..utils import configure_logging, OutputLevel
from .commands import products, release, validate


app = typer.Typer(
    name="zippack",
    help="zippack - 把已打包的 framework 目录生成带内容指纹的 zip 发布归档",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"zippack v{__version__}")
        raise typer.Exit()


def verbose_callback(verbose: bool) -> None:
    configure_logging(level=OutputLevel.DEBUG if verbose else OutputLevel.INFO)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="显示版本并退出"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", callback=verbose_callback, help="输出 DEBUG 级别日志"
    ),
) -> None:
    """zippack - framework 发布归档工具"""


app.command("release", help="生成发布归档")(release.release_command)
app.command("products", help="列出已知产品")(products.products_command)
app.command("validate", help="校验配置文件")(validate.validate_command)


@app.command("info")
def info_command() -> None:
    """显示运行环境与默认设置"""
    from ..config.schema import ArchiveModel, FingerprintModel

    table = Table(title="zippack")
    table.add_column("项目", style="cyan")
    table.add_column("值", style="green")

    fingerprint = FingerprintModel()
    table.add_row("版本", __version__)
    table.add_row("Python", platform.python_version())
    table.add_row("已知产品", str(sum(1 for product in known_products() if product.value)))
    table.add_row("默认指纹", f"{fingerprint.algorithm} / {fingerprint.length} 位")
    table.add_row("默认压缩级别", str(ArchiveModel().level))
    console.print(table)

    usable = sorted(name for name in hashlib.algorithms_guaranteed if not name.startswith("shake"))
    console.print(f"可用指纹算法: {', '.join(usable)}")


@app.command("example")
def example_command(
    output: str = typer.Option("release.yaml", "--output", "-o", help="写入的配置文件路径"),
) -> None:
    """生成示例配置文件"""
    from ..config import ConfigError, ZippackConfig, save_config

    try:
        save_config(ZippackConfig.for_directories("./packaged", "./dist"), output)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"✓ 已生成 [green]{output}[/green]，修改目录后运行:")
    console.print(f"  [cyan]zippack release -c {output}[/cyan]")


if __name__ == "__main__":
    app()
