"""
配置 Schema 定义

使用 Pydantic 定义严格的 YAML 配置模型，支持验证和类型检查。
"""

from __future__ import annotations

import hashlib
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import BaseModel, Field, field_validator


class ReleaseModel(BaseModel):
    """发布目录配置模型"""
    input_dir: Union[str, Path] = Field(..., description="已打包产品目录的根目录")
    output_dir: Union[str, Path] = Field(..., description="zip 归档输出目录")
    bundle_suffix: str = Field(".framework", description="识别二进制 bundle 的目录名后缀")

    @field_validator('input_dir', 'output_dir')
    @classmethod
    def validate_dir(cls, v: Union[str, Path]) -> Path:
        """统一转换为 Path"""
        if not str(v).strip():
            raise ValueError("目录路径不能为空")
        return Path(v)

    @field_validator('bundle_suffix')
    @classmethod
    def validate_bundle_suffix(cls, v: str) -> str:
        """验证 bundle 后缀"""
        if not v.startswith('.') or len(v) < 2:
            raise ValueError("bundle 后缀必须以 '.' 开头，例如 .framework")
        return v


class ArchiveModel(BaseModel):
    """归档配置模型"""
    level: int = Field(6, description="zip 压缩级别", ge=1, le=9)


class FingerprintModel(BaseModel):
    """内容指纹配置模型"""
    algorithm: str = Field("sha256", description="hashlib 哈希算法名称")
    length: int = Field(16, description="归档文件名中使用的指纹长度", ge=1, le=64)

    @field_validator('algorithm')
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        """验证哈希算法"""
        name = v.lower()
        if name not in hashlib.algorithms_available:
            raise ValueError(f"不支持的哈希算法: {v}")
        # shake 系列没有固定长度的摘要
        if name.startswith('shake'):
            raise ValueError(f"哈希算法必须有固定长度的摘要: {v}")
        return name


class RulesModel(BaseModel):
    """注册表规则开关"""
    strip_duplicate_bundles: bool = Field(False, description="删除注册表中标记为重复的 bundle")
    strip_resources: bool = Field(False, description="对需要排除资源的产品删除资源目录")


class ConfigModel(BaseModel):
    """配置元信息模型"""
    version: int = Field(1, description="配置 schema 版本", ge=1)

    @field_validator('version')
    @classmethod
    def validate_config_version(cls, v: int) -> int:
        """验证配置版本"""
        SUPPORTED_VERSIONS = [1]
        if v not in SUPPORTED_VERSIONS:
            raise ValueError(f"不支持的配置版本 {v}，支持的版本: {SUPPORTED_VERSIONS}")
        return v


class ZippackConfig(BaseModel):
    """zippack 主配置模型

    整个配置文件的根模型。
    """

    config: ConfigModel = Field(default_factory=ConfigModel, description="配置元信息")

    release: ReleaseModel = Field(..., description="发布目录配置")

    archive: ArchiveModel = Field(default_factory=ArchiveModel, description="归档配置")
    fingerprint: FingerprintModel = Field(default_factory=FingerprintModel, description="指纹配置")
    rules: RulesModel = Field(default_factory=RulesModel, description="规则开关")

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
        "str_strip_whitespace": True,
    }

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        data = self.model_dump(exclude_none=True)

        def convert_values(obj):
            if isinstance(obj, dict):
                return {k: convert_values(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [convert_values(item) for item in obj]
            elif isinstance(obj, Path):
                return str(obj).replace('\\', '/')
            elif isinstance(obj, Enum):
                return obj.value
            return obj

        return convert_values(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ZippackConfig':
        """从字典创建配置实例"""
        return cls.model_validate(data)

    @classmethod
    def for_directories(cls, input_dir: Union[str, Path], output_dir: Union[str, Path]) -> 'ZippackConfig':
        """只指定输入/输出目录，其余使用默认值"""
        return cls(release=ReleaseModel(input_dir=input_dir, output_dir=output_dir))
