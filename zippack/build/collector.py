"""
文件收集器

递归列出目录下的所有普通文件和符号链接，并按完整路径的字节序排序，
保证不同机器、不同文件系统上得到相同的顺序。
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from .release_context import DirectoryEnumerationError


@dataclass
class FileInfo:
    """文件信息"""
    path: Path  # 完整路径
    relative_path: Path  # 相对于收集根目录的路径
    size: int  # 文件大小（字节），符号链接为目标路径的字节数
    link_target: Optional[str] = None  # 符号链接指向的路径，普通文件为 None

    @property
    def is_link(self) -> bool:
        return self.link_target is not None

    def sort_key(self) -> bytes:
        """排序键：完整路径的原始字节，与区域设置无关"""
        return os.fsencode(str(self.path))

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        data = {
            'path': self.relative_path.as_posix(),
            'size': self.size,
        }
        if self.is_link:
            data['link'] = self.link_target
        return data


class FileCollector:
    """文件收集器

    目录不可读时直接失败，不会静默跳过。
    """

    def __init__(self):
        self.collected_files: List[FileInfo] = []
        self.total_size: int = 0

    def collect_files(self, root: Path) -> List[FileInfo]:
        """收集 root 下的所有普通文件

        Args:
            root: 要扫描的目录

        Returns:
            List[FileInfo]: 按完整路径字节序排序的文件列表

        Raises:
            DirectoryEnumerationError: 目录不存在或无法列出
        """
        root = Path(root)
        if not root.is_dir():
            raise DirectoryEnumerationError(f"不是目录，无法收集文件: {root}")

        self.collected_files = []
        self.total_size = 0

        for file_path in self._walk_directory(root):
            link_target = None
            try:
                if file_path.is_symlink():
                    link_target = os.readlink(file_path)
                    size = len(os.fsencode(link_target))
                else:
                    size = file_path.stat().st_size
            except OSError as e:
                raise DirectoryEnumerationError(f"无法读取文件信息 {file_path}: {e}") from e

            self.collected_files.append(FileInfo(
                path=file_path,
                relative_path=file_path.relative_to(root),
                size=size,
                link_target=link_target,
            ))
            self.total_size += size

        self.collected_files.sort(key=FileInfo.sort_key)
        return self.collected_files

    def get_statistics(self) -> Dict[str, Any]:
        """获取收集统计信息"""
        return {
            'total_files': len(self.collected_files),
            'total_size': self.total_size,
        }

    def _walk_directory(self, directory: Path) -> Iterator[Path]:
        """递归遍历目录，产出普通文件和符号链接

        符号链接本身作为一项产出，不跟随，指向目录的链接也不会造成循环。
        """
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise DirectoryEnumerationError(f"无法列出目录 {directory}: {e}") from e

        for item in entries:
            if item.is_symlink():
                yield item
            elif item.is_dir():
                yield from self._walk_directory(item)
            elif item.is_file():
                yield item


def collect_files(root: Path) -> List[FileInfo]:
    """便捷函数：收集目录下的所有文件"""
    return FileCollector().collect_files(root)


def list_children(directory: Path) -> List[Path]:
    """列出目录的直接子项，按名称排序

    Raises:
        DirectoryEnumerationError: 目录无法列出
    """
    try:
        return sorted(Path(directory).iterdir(), key=lambda p: os.fsencode(p.name))
    except OSError as e:
        raise DirectoryEnumerationError(f"无法列出目录 {directory}: {e}") from e
