"""
内容指纹步骤模块

在 Info.plist 等文件写入之后，对整个产品目录计算内容指纹。
"""

from ...utils import format_size
from ...utils.logging import info, success, error, LogStage
from ..collector import FileCollector
from ..hasher import ContentHasher
from ..release_context import DirectoryEnumerationError, HashingError, ProductContext, ReleaseError
from .release_step import ReleaseStep


class FingerprintStep(ReleaseStep):
    """内容指纹步骤"""

    def __init__(self):
        super().__init__("hash", "计算产品目录内容指纹")

    def get_progress_range(self) -> tuple[int, int]:
        return (40, 60)

    def execute(self, context: ProductContext) -> None:
        fingerprint_config = context.config.fingerprint
        info(f"{context.product}: 计算内容指纹 ({fingerprint_config.algorithm})", stage=LogStage.HASH)

        try:
            collector = FileCollector()
            files = collector.collect_files(context.product_dir)
        except DirectoryEnumerationError as e:
            error(f"{context.product}: 无法列出产品目录: {e}", stage=LogStage.HASH)
            raise HashingError(f"无法计算 {context.product} 的内容指纹: {e}") from e

        stats = collector.get_statistics()
        context.stats['total_files'] = stats['total_files']
        context.stats['total_size'] = stats['total_size']

        try:
            hasher = ContentHasher(fingerprint_config.algorithm)
            context.fingerprint = hasher.fingerprint(context.product_dir, fingerprint_config.length, files)
        except ReleaseError as e:
            error(f"{context.product}: 计算内容指纹失败: {e}", stage=LogStage.HASH)
            raise

        context.report(self.get_progress_range()[1], f"指纹 {context.fingerprint}")
        success(
            f"{context.product}: 指纹 {context.fingerprint} "
            f"({stats['total_files']} 个文件, {format_size(stats['total_size'])})",
            stage=LogStage.HASH,
        )
