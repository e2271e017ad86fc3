"""
发布管道模块

依次处理输入根目录下的每个产品目录，对每个产品按顺序执行发布步骤。
任何一步失败都会立即终止整个发布，之后的产品不再处理。
"""

import time
from pathlib import Path
from typing import List, Optional

from ..config.schema import ZippackConfig
from ..utils.logging import info, success, debug, error, warning, LogStage
from .collector import list_children
from .release_context import (
    DirectoryEnumerationError,
    ProductContext,
    ProgressCallback,
    ReleaseArtifact,
    ReleaseError,
)
from .steps.release_step import ReleaseStep
from .steps.metadata_step import MetadataSynthesisStep
from .steps.notices_step import NoticesStep
from .steps.rules_step import RuleApplicationStep
from .steps.fingerprint_step import FingerprintStep
from .steps.archive_step import ArchiveStep


class ReleasePipeline:
    """发布管道，负责协调发布步骤的执行"""

    def __init__(self):
        self._steps: List[ReleaseStep] = []
        self._init_default_steps()

    def _init_default_steps(self):
        """初始化默认的发布步骤"""
        self._steps = [
            MetadataSynthesisStep(),
            NoticesStep(),
            RuleApplicationStep(),
            FingerprintStep(),
            ArchiveStep(),
        ]

    def add_step(self, step: ReleaseStep, position: Optional[int] = None):
        """添加发布步骤"""
        if position is None:
            self._steps.append(step)
        else:
            self._steps.insert(position, step)

    def remove_step(self, step_name: str):
        """移除发布步骤"""
        self._steps = [step for step in self._steps if step.name != step_name]

    def get_steps(self) -> List[ReleaseStep]:
        """获取所有发布步骤"""
        return self._steps.copy()

    def find_product_dirs(self, input_dir: Path, output_dir: Optional[Path] = None) -> List[Path]:
        """输入根目录下的产品目录，非目录项和输出目录本身被跳过

        Raises:
            DirectoryEnumerationError: 根目录无法列出
        """
        input_dir = Path(input_dir)
        if not input_dir.is_dir():
            raise DirectoryEnumerationError(f"输入目录不存在或不是目录: {input_dir}")

        skipped = Path(output_dir).resolve() if output_dir is not None else None
        product_dirs = []
        for entry in list_children(input_dir):
            if not entry.is_dir():
                debug(f"跳过非目录项: {entry.name}", stage=LogStage.SCAN)
            elif skipped is not None and entry.resolve() == skipped:
                debug(f"跳过输出目录: {entry.name}", stage=LogStage.SCAN)
            else:
                product_dirs.append(entry)
        return product_dirs

    def execute_product(
        self,
        config: ZippackConfig,
        product_dir: Path,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ProductContext:
        """对单个产品目录执行所有步骤

        Raises:
            ReleaseError: 任意步骤失败
        """
        context = ProductContext(
            config=config,
            product=product_dir.name,
            product_dir=product_dir,
            output_dir=Path(config.release.output_dir),
            progress_callback=progress_callback,
        )
        context.stats['start_time'] = time.time()

        for step in self._steps:
            debug(f"{context.product}: 执行步骤 {step.name} - {step.description}", stage=LogStage.RELEASE)
            step.execute(context)

        context.stats['end_time'] = time.time()
        return context

    def execute(
        self,
        config: ZippackConfig,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> List[ReleaseArtifact]:
        """执行发布管道

        Args:
            config: 配置对象
            progress_callback: 进度回调函数

        Returns:
            List[ReleaseArtifact]: 按产品目录名排序的发布产物

        Raises:
            ReleaseError: 发布失败，错误信息中包含出错的产品
        """
        input_dir = Path(config.release.input_dir)
        output_dir = Path(config.release.output_dir)
        info(f"开始发布: {input_dir} -> {output_dir}", stage=LogStage.RELEASE)

        try:
            product_dirs = self.find_product_dirs(input_dir, output_dir)
        except ReleaseError as e:
            error(f"发布失败: {e}", stage=LogStage.SCAN)
            raise

        if not product_dirs:
            warning(f"输入目录中没有产品目录: {input_dir}", stage=LogStage.SCAN)
        else:
            info(f"找到 {len(product_dirs)} 个产品目录", stage=LogStage.SCAN)

        artifacts: List[ReleaseArtifact] = []
        for product_dir in product_dirs:
            try:
                context = self.execute_product(config, product_dir, progress_callback)
            except ReleaseError as e:
                error(f"{product_dir.name}: 发布失败，终止全部产品: {e}", stage=LogStage.RELEASE)
                e.product = product_dir.name
                raise
            if context.artifact is not None:
                artifacts.append(context.artifact)

        success(f"发布完成，共 {len(artifacts)} 个归档", stage=LogStage.DONE)
        return artifacts

    def validate_pipeline(self) -> List[str]:
        """验证发布管道的完整性

        Returns:
            List[str]: 验证错误列表，空列表表示验证通过
        """
        errors = []

        if not self._steps:
            errors.append("发布管道中没有步骤")
            return errors

        prev_end = 0
        for step in self._steps:
            start, end = step.get_progress_range()
            if start != prev_end:
                errors.append(f"步骤 '{step.name}' 的进度范围不连续: 期望起始 {prev_end}%, 实际 {start}%")
            if start >= end:
                errors.append(f"步骤 '{step.name}' 的进度范围无效: {start}% - {end}%")
            prev_end = end

        if prev_end != 100:
            errors.append(f"发布管道的总进度范围不是100%: {prev_end}%")

        return errors
