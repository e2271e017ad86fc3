"""
Info.plist 生成单元测试
"""

import plistlib
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from zippack.build.metadata import (
    MetadataRecord,
    MetadataSynthesizer,
    PLIST_NAME,
    bundle_base_name,
    read_metadata,
)
from zippack.build.release_context import FileWriteOrCopyError, MetadataEncodingError


EXPECTED_KEYS = {
    "CFBundleIdentifier",
    "CFBundleInfoDictionaryVersion",
    "CFBundlePackageType",
    "CFBundleVersion",
    "DTSDKName",
    "CFBundleExecutable",
    "CFBundleName",
}


class TestMetadataRecord:
    """MetadataRecord 测试"""

    def test_for_bundle(self):
        record = MetadataRecord.for_bundle("FirebaseCore.framework")
        assert record.executable == "FirebaseCore"
        assert record.name == "FirebaseCore"
        assert record.bundle_identifier == "com.firebase.Firebase"

    def test_plist_dict(self):
        data = MetadataRecord.for_bundle("FirebaseStorage.framework").to_plist_dict()
        assert set(data) == EXPECTED_KEYS
        assert data == {
            "CFBundleIdentifier": "com.firebase.Firebase",
            "CFBundleInfoDictionaryVersion": "6.0",
            "CFBundlePackageType": "FMWK",
            "CFBundleVersion": "1",
            "DTSDKName": "iphonesimulator11.2",
            "CFBundleExecutable": "FirebaseStorage",
            "CFBundleName": "FirebaseStorage",
        }

    def test_frozen(self):
        record = MetadataRecord.for_bundle("FirebaseCore.framework")
        with pytest.raises(ValidationError):
            record.executable = "Other"

    def test_base_name(self):
        assert bundle_base_name("FirebaseCore.framework") == "FirebaseCore"
        assert bundle_base_name("Protobuf") == "Protobuf"


class TestMetadataSynthesizer:
    """MetadataSynthesizer 测试"""

    def test_synthesize_xml(self):
        data = MetadataSynthesizer().synthesize("FirebaseCore.framework")

        assert data.startswith(b"<?xml")
        assert b"<!DOCTYPE plist" in data
        parsed = plistlib.loads(data)
        assert parsed["CFBundleExecutable"] == "FirebaseCore"
        assert parsed["CFBundleVersion"] == "1"

    def test_identifier_independent_of_bundle(self):
        synthesizer = MetadataSynthesizer()
        first = plistlib.loads(synthesizer.synthesize("FirebaseCore.framework"))
        second = plistlib.loads(synthesizer.synthesize("GoogleUtilities.framework"))
        assert first["CFBundleIdentifier"] == second["CFBundleIdentifier"]

    def test_deterministic(self):
        synthesizer = MetadataSynthesizer()
        assert synthesizer.synthesize("FirebaseCore.framework") == synthesizer.synthesize("FirebaseCore.framework")

    def test_empty_base_name(self):
        """测试无法得到可执行文件名"""
        with pytest.raises(MetadataEncodingError):
            MetadataSynthesizer().synthesize(".framework")

    def test_encoding_failure(self):
        synthesizer = MetadataSynthesizer()
        with patch("zippack.build.metadata.plistlib.dumps", side_effect=TypeError("boom")):
            with pytest.raises(MetadataEncodingError):
                synthesizer.synthesize("FirebaseCore.framework")

    def test_write_overwrites(self, tmp_path):
        bundle = tmp_path / "FirebaseCore.framework"
        bundle.mkdir()
        (bundle / PLIST_NAME).write_text("old")

        synthesizer = MetadataSynthesizer()
        path = synthesizer.write(synthesizer.synthesize(bundle.name), bundle)

        assert path == bundle / PLIST_NAME
        assert read_metadata(bundle)["CFBundleName"] == "FirebaseCore"

    def test_write_failure(self, tmp_path):
        missing = tmp_path / "Missing.framework"
        synthesizer = MetadataSynthesizer()
        with pytest.raises(FileWriteOrCopyError):
            synthesizer.write(synthesizer.synthesize(missing.name), missing)
