"""
zippack - framework 二进制发布归档构建工具

Packages pre-built framework bundles into fingerprinted zip archives for
binary dependency managers.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config.schema import ZippackConfig
from .build.builder import ReleaseBuilder

__all__ = ["ZippackConfig", "ReleaseBuilder", "__version__"]
