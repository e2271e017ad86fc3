"""
路径工具
"""

import os
import tempfile
from pathlib import Path
from typing import Union

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def expand_path(path: Union[str, Path]) -> Path:
    """展开 ~ 和环境变量，返回绝对路径"""
    return Path(os.path.expanduser(os.path.expandvars(str(path)))).resolve()


def ensure_directory(path: Union[str, Path]) -> Path:
    """创建目录（含父目录），已存在时直接返回"""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def get_temp_dir(prefix: str = "zippack_") -> Path:
    """新建一个临时目录，由调用方负责删除"""
    return Path(tempfile.mkdtemp(prefix=prefix))


def format_size(size_bytes: int) -> str:
    """人类可读的文件大小，如 512 B、1.5 KB"""
    size = float(size_bytes)
    for unit in _SIZE_UNITS[:-1]:
        if size < 1024:
            break
        size /= 1024
    else:
        unit = _SIZE_UNITS[-1]

    if unit == "B":
        return f"{int(size)} B"
    return f"{size:.1f} {unit}"
