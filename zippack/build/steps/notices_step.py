"""
NOTICES 复制步骤模块

Analytics 聚合了多个核心 bundle，需要把 FirebaseCore 中的许可声明
复制到产品目录顶层。
"""

import shutil

from ...registry import Product
from ...utils.logging import info, success, error, LogStage
from ..release_context import FileWriteOrCopyError, ProductContext
from .release_step import ReleaseStep

NOTICES_NAME = "NOTICES"
CORE_BUNDLE = "FirebaseCore"


class NoticesStep(ReleaseStep):
    """NOTICES 复制步骤"""

    def __init__(self):
        super().__init__("notices", "复制 Analytics 的 NOTICES 文件")

    def get_progress_range(self) -> tuple[int, int]:
        return (20, 30)

    def applies_to(self, product: str) -> bool:
        return product == Product.ANALYTICS.value

    def execute(self, context: ProductContext) -> None:
        if not self.applies_to(context.product):
            return

        suffix = context.config.release.bundle_suffix
        source = context.product_dir / f"{CORE_BUNDLE}{suffix}" / NOTICES_NAME
        target = context.product_dir / NOTICES_NAME
        info(f"{context.product}: 复制 {source.parent.name}/{NOTICES_NAME}", stage=LogStage.NOTICES)

        try:
            shutil.copyfile(source, target)
        except OSError as e:
            error(f"{context.product}: 复制 {NOTICES_NAME} 失败: {e}", stage=LogStage.NOTICES)
            raise FileWriteOrCopyError(
                f"无法将 {source} 复制到 {target} ({context.product}): {e}"
            ) from e

        context.report(self.get_progress_range()[1], f"已复制 {NOTICES_NAME}")
        success(f"{context.product}: {NOTICES_NAME} 已复制到产品目录", stage=LogStage.NOTICES)
