"""
目录内容哈希

对目录下所有文件的内容计算一个稳定的指纹，只用于给归档文件命名，
不用于防篡改校验。
"""

import hashlib
from pathlib import Path
from typing import List, Optional

from ..utils.logging import debug, LogStage
from .collector import FileCollector, FileInfo
from .release_context import DirectoryEnumerationError, FileReadError, HashingError

DEFAULT_ALGORITHM = "sha256"
DEFAULT_FINGERPRINT_LENGTH = 16


class HashCalculator:
    """哈希计算器"""

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM):
        """初始化哈希计算器

        Args:
            algorithm: hashlib 哈希算法名称
        """
        self.algorithm = algorithm.lower()
        if self.algorithm not in hashlib.algorithms_available:
            raise ValueError(f"不支持的哈希算法: {algorithm}")

        self._hasher = hashlib.new(self.algorithm)

    def update_from_file(self, file_path: Path, chunk_size: int = 64 * 1024) -> None:
        """从文件更新哈希

        Raises:
            OSError: 文件读取失败
        """
        with open(file_path, 'rb') as f:
            while True:
                chunk = f.read(chunk_size)
                if not chunk:
                    break
                self._hasher.update(chunk)

    def hexdigest(self) -> str:
        """获取十六进制哈希值"""
        return self._hasher.hexdigest()


class ContentHasher:
    """目录内容哈希器

    按完整路径字节序依次把每个文件的原始内容送入同一个哈希累加器。
    文件名本身不参与计算，只有内容和顺序决定结果。指向文件的符号链接
    按目标内容计算，指向目录或悬空的符号链接不参与计算。
    """

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM):
        self.algorithm = algorithm
        # 提前校验算法名
        HashCalculator(algorithm)

    def hash(self, directory: Path, files: Optional[List[FileInfo]] = None) -> str:
        """计算目录内容的十六进制摘要

        Args:
            directory: 要计算的目录
            files: 已经收集好的文件列表，给出时不再遍历目录

        Returns:
            str: 十六进制摘要

        Raises:
            HashingError: 目录无法列出
            FileReadError: 文件无法读取
        """
        directory = Path(directory)
        if files is None:
            try:
                files = FileCollector().collect_files(directory)
            except DirectoryEnumerationError as e:
                raise HashingError(f"无法列出 {directory} 的内容: {e}") from e

        calculator = HashCalculator(self.algorithm)
        for file_info in files:
            if file_info.is_link and not file_info.path.is_file():
                continue
            try:
                calculator.update_from_file(file_info.path)
            except OSError as e:
                raise FileReadError(f"读取文件失败 {file_info.path}: {e}") from e

        digest = calculator.hexdigest()
        debug(f"{directory.name}: {len(files)} 个文件, {self.algorithm}={digest}", stage=LogStage.HASH)
        return digest

    def fingerprint(
        self,
        directory: Path,
        length: int = DEFAULT_FINGERPRINT_LENGTH,
        files: Optional[List[FileInfo]] = None,
    ) -> str:
        """取摘要的前 length 个字符作为指纹"""
        if length < 1:
            raise ValueError(f"指纹长度必须为正数: {length}")
        return self.hash(directory, files)[:length]


def hash_directory(directory: Path, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """便捷函数：计算目录内容摘要"""
    return ContentHasher(algorithm).hash(directory)
