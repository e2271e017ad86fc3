"""发布构建模块

提供 framework 发布归档的核心功能。
"""

from .builder import ReleaseBuilder, ReleaseResult
from .release_pipeline import ReleasePipeline
from .release_context import (
    ArchiveProductionError,
    ArtifactMoveError,
    DirectoryEnumerationError,
    FileReadError,
    FileWriteOrCopyError,
    HashingError,
    MetadataEncodingError,
    ProductContext,
    ReleaseArtifact,
    ReleaseError,
)
from .collector import FileCollector, FileInfo, collect_files
from .hasher import ContentHasher, HashCalculator, hash_directory
from .metadata import MetadataRecord, MetadataSynthesizer
from .archiver import ZipArchiver

__all__ = [
    # 主构建器
    "ReleaseBuilder",
    "ReleaseResult",
    "ReleasePipeline",
    "ProductContext",
    "ReleaseArtifact",

    # 错误
    "ReleaseError",
    "DirectoryEnumerationError",
    "FileReadError",
    "MetadataEncodingError",
    "FileWriteOrCopyError",
    "HashingError",
    "ArchiveProductionError",
    "ArtifactMoveError",

    # 文件收集与哈希
    "FileCollector",
    "FileInfo",
    "collect_files",
    "ContentHasher",
    "HashCalculator",
    "hash_directory",

    # 元数据与归档
    "MetadataRecord",
    "MetadataSynthesizer",
    "ZipArchiver",
]
