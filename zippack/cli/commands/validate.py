"""
Validate 命令实现

只校验 release 配置文件，不读取产品目录。
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ...config import describe_errors, validate_config


console = Console()

MAX_VALUE_WIDTH = 50


def _shorten(value: str) -> str:
    if len(value) <= MAX_VALUE_WIDTH:
        return value or "-"
    return value[:MAX_VALUE_WIDTH - 3] + "..."


def validate_command(
    config: str = typer.Option(..., "--config", "-c", help="配置文件路径"),
    json_output: bool = typer.Option(False, "--json", help="以 JSON 输出错误"),
) -> None:
    """校验配置文件

    示例:
        zippack validate -c release.yaml
        zippack validate -c release.yaml --json
    """
    config_path = Path(config)
    if not config_path.is_file():
        console.print(f"[red]找不到配置文件: {config_path}[/red]")
        raise typer.Exit(1)

    console.print(f"校验 [cyan]{config_path}[/cyan]")
    errors = validate_config(config_path)
    if not errors:
        console.print("[green]✓ 配置有效[/green]")
        return

    if json_output:
        payload = {"file": str(config_path), "error_count": len(errors), "errors": errors}
        console.print(json.dumps(payload, ensure_ascii=False, indent=2, default=str), markup=False, soft_wrap=True)
        raise typer.Exit(1)

    table = Table(title=f"{config_path.name}: {len(errors)} 处错误")
    table.add_column("位置", style="cyan", no_wrap=True)
    table.add_column("错误", style="red")
    table.add_column("当前值", style="yellow")
    for location, message, value in describe_errors(errors):
        table.add_row(location, message, _shorten(value))

    console.print(table)
    raise typer.Exit(1)
