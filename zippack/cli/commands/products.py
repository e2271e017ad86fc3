"""
Products 命令实现

列出注册表中的所有产品及其打包规则。
"""

import typer
from rich.console import Console
from rich.table import Table

from ...registry import (
    canonical_name,
    dependency_header,
    duplicate_bundles_to_remove,
    exclude_resources,
    known_products,
)


console = Console()


def products_command(
    headers: bool = typer.Option(False, "--headers", help="只输出 README 依赖标题"),
) -> None:
    """列出已知产品

    示例:
        zippack products
        zippack products --headers
    """
    products = [product for product in known_products() if product.value]

    if headers:
        for product in products:
            console.print(dependency_header(product.value), end="", markup=False, highlight=False)
        return

    table = Table(title="已知产品")
    table.add_column("名称", style="cyan")
    table.add_column("包名", style="green")
    table.add_column("排除资源", justify="center")
    table.add_column("重复 bundle")
    table.add_column("依赖标题", style="dim")

    for product in products:
        raw = product.value
        table.add_row(
            raw,
            canonical_name(raw),
            "✓" if exclude_resources(raw) else "",
            ", ".join(duplicate_bundles_to_remove(raw)),
            dependency_header(raw).rstrip("\n"),
        )

    console.print(table)
