"""
Release 命令实现

生成发布归档的核心命令。
"""

import traceback
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ...config import load_config, ConfigError, ConfigValidationError, ZippackConfig
from ...utils import expand_path, format_size
from ...utils.logging import set_log_level, set_log_file, OutputLevel


console = Console()


def _resolve_config(config: Optional[str], input_dir: Optional[str], output_dir: Optional[str]) -> ZippackConfig:
    """配置文件与命令行参数合并，命令行参数优先"""
    if config:
        config_obj = load_config(Path(config))
        if input_dir:
            config_obj.release.input_dir = expand_path(input_dir)
        if output_dir:
            config_obj.release.output_dir = expand_path(output_dir)
        return config_obj

    if not input_dir or not output_dir:
        console.print("[red]未指定配置文件时必须同时提供 --input 和 --output[/red]")
        raise typer.Exit(1)

    return ZippackConfig.for_directories(expand_path(input_dir), expand_path(output_dir))


def release_command(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="配置文件路径"),
    input_dir: Optional[str] = typer.Option(None, "--input", "-i", help="已打包产品目录的根目录"),
    output_dir: Optional[str] = typer.Option(None, "--output", "-o", help="zip 归档输出目录"),
    strip_duplicates: bool = typer.Option(False, "--strip-duplicates", help="删除注册表中标记为重复的 bundle"),
    strip_resources: bool = typer.Option(False, "--strip-resources", help="对需要排除资源的产品删除资源目录"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="日志输出文件"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出详细调试日志 (DEBUG 级别)"),
) -> None:
    """生成发布归档

    为输入目录下的每个产品目录生成 <产品>-<指纹>.zip。

    示例:
        zippack release -i ./packaged -o ./dist
        zippack release -c release.yaml --strip-duplicates
    """
    from ...build.builder import ReleaseBuilder

    set_log_level(OutputLevel.DEBUG if verbose else OutputLevel.INFO)
    if log_file:
        set_log_file(log_file)

    try:
        config_obj = _resolve_config(config, input_dir, output_dir)
        if strip_duplicates:
            config_obj.rules.strip_duplicate_bundles = True
        if strip_resources:
            config_obj.rules.strip_resources = True
    except ConfigValidationError as e:
        console.print("[red]配置验证失败:[/red]")
        console.print(e.format_errors())
        raise typer.Exit(1)
    except ConfigError as e:
        console.print(f"[red]配置错误[/red]: {e}")
        raise typer.Exit(1)

    console.print(f"[cyan]开始发布[/cyan]: {config_obj.release.input_dir}")

    try:
        result = ReleaseBuilder().build(config_obj)
    except Exception as e:
        console.print(f"[red]✗ 发布过程中发生意外错误[/red]: {e}")
        if log_file:
            console.print(f"[yellow]详细错误信息:[/yellow]\n{traceback.format_exc()}")
        raise typer.Exit(1)

    if not result.success:
        product = f" ({result.failed_product})" if result.failed_product else ""
        console.print(f"[red]✗ 发布失败{product}[/red]: {result.error}")
        if log_file:
            console.print(f"[yellow]请检查日志文件 {log_file} 获取详细信息。[/yellow]")
        raise typer.Exit(1)

    table = Table(title="发布产物")
    table.add_column("产品", style="cyan")
    table.add_column("指纹", style="magenta")
    table.add_column("文件", style="green")
    table.add_column("大小", justify="right")
    for artifact in result.artifacts:
        table.add_row(artifact.product, artifact.fingerprint, artifact.path.name, format_size(artifact.size))

    console.print(table)
    console.print(f"[green]✓ 发布完成[/green]: {len(result.artifacts)} 个归档, 用时 {result.build_time:.1f} 秒")
