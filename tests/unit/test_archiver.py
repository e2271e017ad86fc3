"""
zip 归档器单元测试
"""

import stat
import zipfile
from unittest.mock import patch

import pytest

from zippack.build.archiver import FIXED_DATE_TIME, ZipArchiver
from zippack.build.release_context import ArchiveProductionError


def make_product(root):
    (root / "FirebaseCore.framework" / "Headers").mkdir(parents=True)
    (root / "FirebaseCore.framework" / "FirebaseCore").write_bytes(b"\x00binary" * 100)
    (root / "FirebaseCore.framework" / "Headers" / "FIRApp.h").write_text("@interface FIRApp")
    (root / "README.md").write_text("readme")
    return root


class TestZipArchiver:
    """ZipArchiver 测试"""

    def test_level_clamped(self):
        assert ZipArchiver(0).level == 1
        assert ZipArchiver(22).level == 9

    def test_zip_contents(self, tmp_path):
        product = make_product(tmp_path / "Storage")

        archive = ZipArchiver().zip_contents(product)

        assert archive.name == "Storage.zip"
        assert not archive.is_relative_to(product)
        with zipfile.ZipFile(archive) as zf:
            assert zf.namelist() == [
                "FirebaseCore.framework/FirebaseCore",
                "FirebaseCore.framework/Headers/FIRApp.h",
                "README.md",
            ]
            assert zf.read("README.md") == b"readme"
            assert all(info.date_time == FIXED_DATE_TIME for info in zf.infolist())

    def test_reproducible(self, tmp_path):
        """测试相同的目录树生成逐字节相同的归档"""
        first = make_product(tmp_path / "a" / "Storage")
        second = make_product(tmp_path / "b" / "Storage")

        archiver = ZipArchiver()
        assert archiver.zip_contents(first).read_bytes() == archiver.zip_contents(second).read_bytes()

    def test_progress_callback(self, tmp_path):
        product = make_product(tmp_path / "Storage")
        calls = []

        ZipArchiver().zip_contents(product, lambda current, total, name=None: calls.append(name))

        assert calls == [
            "FirebaseCore.framework/FirebaseCore",
            "FirebaseCore.framework/Headers/FIRApp.h",
            "README.md",
        ]

    def test_symlinks_stored_as_links(self, tmp_path):
        """测试符号链接以链接条目保存，而不是展开或丢弃"""
        product = make_product(tmp_path / "Storage")
        framework = product / "FirebaseCore.framework"
        try:
            (framework / "Current").symlink_to("Headers", target_is_directory=True)
            (framework / "Binary").symlink_to("FirebaseCore")
        except (OSError, NotImplementedError):
            pytest.skip("无法创建符号链接")

        archive = ZipArchiver().zip_contents(product)

        with zipfile.ZipFile(archive) as zf:
            assert zf.namelist() == [
                "FirebaseCore.framework/Binary",
                "FirebaseCore.framework/Current",
                "FirebaseCore.framework/FirebaseCore",
                "FirebaseCore.framework/Headers/FIRApp.h",
                "README.md",
            ]
            for name, target in [("Binary", b"FirebaseCore"), ("Current", b"Headers")]:
                info = zf.getinfo(f"FirebaseCore.framework/{name}")
                assert stat.S_ISLNK(info.external_attr >> 16)
                assert zf.read(info) == target
            regular = zf.getinfo("README.md")
            assert stat.S_ISREG(regular.external_attr >> 16)
            assert stat.S_IMODE(regular.external_attr >> 16) == 0o644

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ArchiveProductionError):
            ZipArchiver().zip_contents(tmp_path / "missing")

    def test_write_failure(self, tmp_path):
        product = make_product(tmp_path / "Storage")
        with patch("zippack.build.archiver.zipfile.ZipFile", side_effect=OSError("disk full")):
            with pytest.raises(ArchiveProductionError):
                ZipArchiver().zip_contents(product)
