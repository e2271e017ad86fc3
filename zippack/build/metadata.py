"""
Info.plist 生成

二进制依赖管理器在安装 framework 时要求存在 Info.plist，静态 framework
本身并不使用它。这里为每个 bundle 生成固定结构的 XML plist。
"""

import plistlib
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

from .release_context import FileWriteOrCopyError, MetadataEncodingError

PLIST_NAME = "Info.plist"

BUNDLE_IDENTIFIER = "com.firebase.Firebase"
INFO_DICTIONARY_VERSION = "6.0"
PACKAGE_TYPE = "FMWK"
PACKAGE_VERSION = "1"
SDK_NAME = "iphonesimulator11.2"


def bundle_base_name(bundle_name: str) -> str:
    """去掉扩展名后的 bundle 名称，如 FirebaseCore.framework -> FirebaseCore"""
    return bundle_name.split(".")[0]


class MetadataRecord(BaseModel):
    """单个 bundle 的 Info.plist 内容"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bundle_identifier: str = Field(BUNDLE_IDENTIFIER, alias="CFBundleIdentifier")
    info_dictionary_version: str = Field(INFO_DICTIONARY_VERSION, alias="CFBundleInfoDictionaryVersion")
    package_type: str = Field(PACKAGE_TYPE, alias="CFBundlePackageType")
    package_version: str = Field(PACKAGE_VERSION, alias="CFBundleVersion")
    sdk_name: str = Field(SDK_NAME, alias="DTSDKName")
    executable: str = Field(..., alias="CFBundleExecutable", min_length=1)
    name: str = Field(..., alias="CFBundleName", min_length=1)

    @classmethod
    def for_bundle(cls, bundle_name: str) -> 'MetadataRecord':
        base_name = bundle_base_name(bundle_name)
        return cls(executable=base_name, name=base_name)

    def to_plist_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class MetadataSynthesizer:
    """Info.plist 生成器"""

    def build(self, bundle_name: str) -> MetadataRecord:
        """构建 bundle 的元数据记录

        Raises:
            MetadataEncodingError: bundle 名称无法得到有效的可执行文件名
        """
        try:
            return MetadataRecord.for_bundle(bundle_name)
        except ValueError as e:
            raise MetadataEncodingError(f"无法为 {bundle_name} 生成 {PLIST_NAME}: {e}") from e

    def serialize(self, record: MetadataRecord) -> bytes:
        """编码为 XML plist

        Raises:
            MetadataEncodingError: 编码失败
        """
        try:
            return plistlib.dumps(record.to_plist_dict(), fmt=plistlib.FMT_XML, sort_keys=True)
        except (TypeError, ValueError, OverflowError) as e:
            raise MetadataEncodingError(f"无法编码 {record.name} 的 {PLIST_NAME}: {e}") from e

    def synthesize(self, bundle_name: str) -> bytes:
        """生成 bundle 的 Info.plist 内容"""
        return self.serialize(self.build(bundle_name))

    def write(self, data: bytes, bundle_path: Path) -> Path:
        """将 plist 写入 <bundle>/Info.plist，已存在时覆盖

        Raises:
            FileWriteOrCopyError: 写入失败
        """
        plist_path = Path(bundle_path) / PLIST_NAME
        try:
            plist_path.write_bytes(data)
        except OSError as e:
            raise FileWriteOrCopyError(f"无法写入 {plist_path}: {e}") from e
        return plist_path


def read_metadata(bundle_path: Path) -> Dict[str, Any]:
    """读取 bundle 中已生成的 Info.plist"""
    with open(Path(bundle_path) / PLIST_NAME, 'rb') as f:
        return plistlib.load(f)
