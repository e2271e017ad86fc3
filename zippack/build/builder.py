"""
发布构建器主类

负责整个发布流程的协调，失败时返回带错误信息的结果而不是抛出异常。
"""

import time
from dataclasses import dataclass, field
from typing import List, Optional

from ..config.schema import ZippackConfig
from .release_context import ProgressCallback, ReleaseArtifact, ReleaseError
from .release_pipeline import ReleasePipeline


@dataclass
class ReleaseResult:
    """发布结果"""
    success: bool
    artifacts: List[ReleaseArtifact] = field(default_factory=list)
    build_time: Optional[float] = None
    error: Optional[str] = None
    failed_product: Optional[str] = None


class ReleaseBuilder:
    """发布构建器

    使用管道模式处理每个产品目录，提供统一的发布接口。
    """

    def __init__(self):
        self.pipeline = ReleasePipeline()

    def build(
        self,
        config: ZippackConfig,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ReleaseResult:
        """为输入目录下的所有产品生成发布归档

        Args:
            config: 配置对象
            progress_callback: 进度回调函数

        Returns:
            ReleaseResult: 发布结果；第一个失败的产品会终止整个发布
        """
        start_time = time.time()
        try:
            artifacts = self.pipeline.execute(config, progress_callback)
        except ReleaseError as e:
            return ReleaseResult(
                success=False,
                build_time=time.time() - start_time,
                error=str(e),
                failed_product=e.product,
            )

        return ReleaseResult(
            success=True,
            artifacts=artifacts,
            build_time=time.time() - start_time,
        )

    def validate_release_pipeline(self) -> List[str]:
        """验证发布管道的完整性"""
        return self.pipeline.validate_pipeline()
