"""
zip 归档器

将目录内容打成 zip。条目按路径排序，并使用固定的时间戳和权限，
相同的目录树总是得到逐字节相同的归档。符号链接以链接条目保存，
解压后保持 framework 的 Versions/Current 等结构。
"""

import os
import shutil
import stat
import zipfile
from pathlib import Path
from typing import List, Optional, Protocol

from .collector import FileCollector, FileInfo
from .release_context import ArchiveProductionError, DirectoryEnumerationError
from ..utils.paths import get_temp_dir

# zip 格式能表示的最早时间
FIXED_DATE_TIME = (1980, 1, 1, 0, 0, 0)
FILE_MODE = 0o644
LINK_MODE = 0o777


class ProgressCallback(Protocol):
    """进度回调协议"""

    def __call__(self, current: int, total: int, current_file: Optional[str] = None) -> None:
        ...


class ZipArchiver:
    """zip 归档器"""

    def __init__(self, level: int = 6):
        self.level = min(9, max(1, level))

    def archive_files(
        self,
        files: List[FileInfo],
        archive_path: Path,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> int:
        """把文件列表写入 archive_path

        Returns:
            int: 归档文件大小（字节）

        Raises:
            ArchiveProductionError: 读取源文件或写入归档失败
        """
        total_bytes = sum(f.size for f in files)
        processed_bytes = 0
        entries = sorted(files, key=lambda f: f.relative_path.as_posix().encode('utf-8'))

        try:
            with zipfile.ZipFile(archive_path, 'w', zipfile.ZIP_DEFLATED, compresslevel=self.level) as zf:
                for file_info in entries:
                    arcname = file_info.relative_path.as_posix()
                    if progress_callback:
                        progress_callback(processed_bytes, total_bytes, arcname)

                    info = zipfile.ZipInfo(arcname, date_time=FIXED_DATE_TIME)
                    info.create_system = 3  # Unix，权限位才有意义
                    if file_info.is_link:
                        # 符号链接保存为链接本身，内容是目标路径
                        info.external_attr = (stat.S_IFLNK | LINK_MODE) << 16
                        data = os.fsencode(file_info.link_target)
                    else:
                        info.external_attr = (stat.S_IFREG | FILE_MODE) << 16
                        data = file_info.path.read_bytes()
                    zf.writestr(
                        info,
                        data,
                        compress_type=zipfile.ZIP_DEFLATED,
                        compresslevel=self.level,
                    )

                    processed_bytes += file_info.size
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiveProductionError(f"生成归档 {archive_path} 失败: {e}") from e

        return archive_path.stat().st_size

    def zip_contents(self, directory: Path, progress_callback: Optional[ProgressCallback] = None) -> Path:
        """将目录内容打包到一个新建临时目录中的 zip 文件

        Args:
            directory: 要打包的目录，归档内路径相对于该目录

        Returns:
            Path: 生成的 zip 文件路径，由调用方移动或删除

        Raises:
            ArchiveProductionError: 打包失败
        """
        directory = Path(directory)
        try:
            files = FileCollector().collect_files(directory)
        except DirectoryEnumerationError as e:
            raise ArchiveProductionError(f"无法打包 {directory}: {e}") from e

        try:
            temp_dir = get_temp_dir(prefix="zippack_archive_")
        except OSError as e:
            raise ArchiveProductionError(f"无法创建临时目录: {e}") from e

        archive_path = temp_dir / f"{directory.name}.zip"
        try:
            self.archive_files(files, archive_path, progress_callback)
        except ArchiveProductionError:
            shutil.rmtree(temp_dir, ignore_errors=True)
            raise
        return archive_path
