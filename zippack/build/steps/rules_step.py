"""
注册表规则应用步骤模块

按注册表删除可传递重复的 bundle，以及需要排除资源的产品中的资源目录。
两项规则都需要在配置中显式开启。
"""

import shutil
from pathlib import Path
from typing import List

from ...registry import duplicate_bundles_to_remove, exclude_resources
from ...utils.logging import info, success, debug, error, LogStage
from ..collector import list_children
from ..release_context import FileWriteOrCopyError, ProductContext
from .release_step import ReleaseStep

RESOURCES_DIR = "Resources"
RESOURCE_BUNDLE_SUFFIX = ".bundle"


class RuleApplicationStep(ReleaseStep):
    """注册表规则应用步骤"""

    def __init__(self):
        super().__init__("strip", "应用注册表打包规则")

    def get_progress_range(self) -> tuple[int, int]:
        return (30, 40)

    def execute(self, context: ProductContext) -> None:
        rules = context.config.rules
        if not (rules.strip_duplicate_bundles or rules.strip_resources):
            return

        removed: List[str] = []

        if rules.strip_duplicate_bundles:
            for bundle_name in duplicate_bundles_to_remove(context.product):
                bundle = context.product_dir / bundle_name
                if not bundle.exists():
                    debug(f"{context.product}: 未找到重复 bundle {bundle_name}", stage=LogStage.STRIP)
                    continue
                self._remove(context, bundle)
                removed.append(bundle_name)

        if rules.strip_resources and exclude_resources(context.product):
            for resource in self._find_resources(context.product_dir):
                self._remove(context, resource)
                removed.append(resource.relative_to(context.product_dir).as_posix())

        context.removed = removed
        context.bundles = [name for name in context.bundles if name not in removed]
        context.report(self.get_progress_range()[1], f"删除 {len(removed)} 项")

        if removed:
            success(f"{context.product}: 已删除 {', '.join(removed)}", stage=LogStage.STRIP)
        else:
            info(f"{context.product}: 没有需要删除的内容", stage=LogStage.STRIP)

    def _find_resources(self, product_dir: Path) -> List[Path]:
        """产品目录顶层的 *.bundle，以及各 bundle 中的 Resources 目录"""
        found = []
        for child in list_children(product_dir):
            if not child.is_dir():
                continue
            if child.name.endswith(RESOURCE_BUNDLE_SUFFIX):
                found.append(child)
                continue
            resources = child / RESOURCES_DIR
            if resources.is_dir():
                found.append(resources)
        return found

    def _remove(self, context: ProductContext, path: Path) -> None:
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as e:
            error(f"{context.product}: 删除 {path.name} 失败: {e}", stage=LogStage.STRIP)
            raise FileWriteOrCopyError(f"无法删除 {path} ({context.product}): {e}") from e
