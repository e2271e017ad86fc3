"""
发布步骤基类模块

定义单个产品目录上执行的发布步骤的抽象接口。
"""

from abc import ABC, abstractmethod

from ..release_context import ProductContext


class ReleaseStep(ABC):
    """发布步骤抽象基类"""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description

    @abstractmethod
    def execute(self, context: ProductContext) -> None:
        """执行发布步骤"""
        pass

    @abstractmethod
    def get_progress_range(self) -> tuple[int, int]:
        """获取此步骤在单个产品内的进度范围 (start_percent, end_percent)"""
        pass
