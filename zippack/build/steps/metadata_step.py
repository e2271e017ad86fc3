"""
Info.plist 生成步骤模块

为产品目录中每个 bundle 写入 Info.plist。
"""

from ...utils.logging import info, success, debug, error, LogStage
from ..collector import list_children
from ..metadata import MetadataSynthesizer, PLIST_NAME
from ..release_context import ProductContext, ReleaseError
from .release_step import ReleaseStep


class MetadataSynthesisStep(ReleaseStep):
    """Info.plist 生成步骤"""

    def __init__(self):
        super().__init__("plist", "为 bundle 生成 Info.plist")
        self.synthesizer = MetadataSynthesizer()

    def get_progress_range(self) -> tuple[int, int]:
        return (0, 20)

    def execute(self, context: ProductContext) -> None:
        suffix = context.config.release.bundle_suffix
        info(f"{context.product}: 扫描 {suffix} bundle", stage=LogStage.PLIST)

        try:
            bundles = [
                child for child in list_children(context.product_dir)
                if child.name.endswith(suffix)
            ]

            for bundle in bundles:
                data = self.synthesizer.synthesize(bundle.name)
                self.synthesizer.write(data, bundle)
                debug(f"已写入 {bundle.name}/{PLIST_NAME}", stage=LogStage.PLIST)

            context.bundles = [bundle.name for bundle in bundles]
            context.stats['bundles'] = len(bundles)
            context.report(self.get_progress_range()[1], f"{len(bundles)} 个 bundle")

            success(f"{context.product}: 已生成 {len(bundles)} 个 {PLIST_NAME}", stage=LogStage.PLIST)

        except ReleaseError as e:
            error(f"{context.product}: 生成 {PLIST_NAME} 失败: {e}", stage=LogStage.PLIST)
            raise
