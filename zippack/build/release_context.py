"""
发布上下文模块

定义发布过程中的共享数据结构和异常类。
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..config.schema import ZippackConfig

# 进度回调类型: (阶段, 当前, 总数, 消息)
ProgressCallback = Callable[[str, int, int, str], None]


class ReleaseError(Exception):
    """发布错误基类，任何一个都会终止整个发布流程"""

    def __init__(self, message: str, product: Optional[str] = None):
        super().__init__(message)
        self.product = product


class DirectoryEnumerationError(ReleaseError):
    """无法列出目录内容"""
    pass


class FileReadError(ReleaseError):
    """无法读取文件"""
    pass


class MetadataEncodingError(ReleaseError):
    """无法编码 Info.plist"""
    pass


class FileWriteOrCopyError(ReleaseError):
    """无法写入或复制文件"""
    pass


class HashingError(ReleaseError):
    """无法计算目录内容指纹"""
    pass


class ArchiveProductionError(ReleaseError):
    """无法生成 zip 归档"""
    pass


class ArtifactMoveError(ReleaseError):
    """无法将归档移动到输出目录"""
    pass


@dataclass
class ReleaseArtifact:
    """发布产物"""
    product: str
    fingerprint: str
    path: Path
    size: int


@dataclass
class ProductContext:
    """单个产品目录的发布上下文"""
    config: ZippackConfig
    product: str  # 产品目录名，即产品原始名称
    product_dir: Path
    output_dir: Path
    progress_callback: Optional[ProgressCallback] = None

    # 发布过程中生成的数据
    bundles: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    fingerprint: Optional[str] = None
    archive_path: Optional[Path] = None
    artifact: Optional[ReleaseArtifact] = None

    stats: Dict[str, Any] = field(default_factory=lambda: {
        'start_time': 0,
        'end_time': 0,
        'bundles': 0,
        'total_files': 0,
        'total_size': 0,
        'archive_size': 0,
    })

    def report(self, current: int, message: str = "") -> None:
        """向调用方报告产品内进度 (0-100)"""
        if self.progress_callback:
            self.progress_callback(self.product, current, 100, message)
