"""
归档步骤模块

将产品目录打包为 zip，并以 <产品目录名>-<指纹>.zip 移动到输出目录。
"""

import shutil
from pathlib import Path

from ...utils import ensure_directory, format_size
from ...utils.logging import info, success, debug, error, LogStage
from ..archiver import ZipArchiver
from ..release_context import (
    ArtifactMoveError,
    ProductContext,
    ReleaseArtifact,
    ReleaseError,
)
from .release_step import ReleaseStep


def artifact_name(product: str, fingerprint: str) -> str:
    """发布产物文件名"""
    return f"{product}-{fingerprint}.zip"


class ArchiveStep(ReleaseStep):
    """归档步骤"""

    def __init__(self):
        super().__init__("archive", "打包并移动到输出目录")

    def get_progress_range(self) -> tuple[int, int]:
        return (60, 100)

    def execute(self, context: ProductContext) -> None:
        if not context.fingerprint:
            raise ReleaseError(f"{context.product}: 缺少内容指纹，无法命名归档")

        name = artifact_name(context.product, context.fingerprint)
        info(f"{context.product}: 打包 {name}", stage=LogStage.ARCHIVE)

        archiver = ZipArchiver(context.config.archive.level)
        start, end = self.get_progress_range()

        def archive_progress(current: int, total: int, current_file=None) -> None:
            if total > 0:
                # 打包占用本步骤前半段进度
                context.report(start + int(current / total * (end - start) / 2), current_file or "")

        try:
            context.archive_path = archiver.zip_contents(context.product_dir, archive_progress)
        except ReleaseError as e:
            error(f"{context.product}: 打包失败: {e}", stage=LogStage.ARCHIVE)
            raise

        target = context.output_dir / name
        debug(f"临时归档 {context.archive_path} -> {target}", stage=LogStage.MOVE)
        try:
            ensure_directory(context.output_dir)
            shutil.move(str(context.archive_path), str(target))
        except OSError as e:
            error(f"{context.product}: 移动归档失败: {e}", stage=LogStage.MOVE)
            raise ArtifactMoveError(f"无法将 {context.archive_path} 移动到 {target} ({context.product}): {e}") from e
        finally:
            self._cleanup_temp(context.archive_path.parent)

        size = target.stat().st_size
        context.stats['archive_size'] = size
        context.artifact = ReleaseArtifact(
            product=context.product,
            fingerprint=context.fingerprint,
            path=target,
            size=size,
        )

        context.report(end, name)
        success(f"{context.product}: {target} ({format_size(size)})", stage=LogStage.MOVE)

    @staticmethod
    def _cleanup_temp(temp_dir: Path) -> None:
        shutil.rmtree(temp_dir, ignore_errors=True)
