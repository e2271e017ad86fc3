"""
工具版本号

三段式版本号 (major, minor, patch)，用于在多个候选中找出最高的已安装工具版本。
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional

_VERSION_PATTERN = re.compile(r'^\s*(\d+)(?:\.(\d+))?(?:\.(\d+))?\s*$')


@dataclass(frozen=True, order=True)
class ToolVersion:
    """三段式版本号

    字段顺序即比较顺序：先 major，再 minor，最后 patch，高位不等时不再比较低位。
    """
    major: int
    minor: int = 0
    patch: int = 0

    def __post_init__(self):
        if min(self.major, self.minor, self.patch) < 0:
            raise ValueError(f"版本号各段不能为负数: {self.major}.{self.minor}.{self.patch}")

    @classmethod
    def parse(cls, text: str) -> 'ToolVersion':
        """解析 "12"、"12.4"、"12.4.1" 形式的版本号，缺失的段补 0"""
        match = _VERSION_PATTERN.match(text)
        if not match:
            raise ValueError(f"无法解析版本号: {text!r}")
        major, minor, patch = (int(part) if part else 0 for part in match.groups())
        return cls(major, minor, patch)

    def pod_version(self) -> str:
        """依赖清单中使用的 "MAJOR.MINOR" 形式"""
        return f"{self.major}.{self.minor}"

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def highest_version(candidates: Iterable[ToolVersion]) -> Optional[ToolVersion]:
    """返回候选中的最高版本，没有候选时返回 None"""
    return max(candidates, default=None)
