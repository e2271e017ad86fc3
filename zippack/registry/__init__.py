"""产品注册表模块

封闭的产品集合、打包规则和工具版本比较。
"""

from .products import (
    Product,
    ProductRules,
    RULES,
    canonical_name,
    dependency_header,
    duplicate_bundles_to_remove,
    exclude_resources,
    known_products,
    lookup,
    rules_for,
)
from .version import ToolVersion, highest_version

__all__ = [
    "Product",
    "ProductRules",
    "RULES",
    "canonical_name",
    "dependency_header",
    "duplicate_bundles_to_remove",
    "exclude_resources",
    "known_products",
    "lookup",
    "rules_for",
    "ToolVersion",
    "highest_version",
]
