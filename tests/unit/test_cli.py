"""
CLI 单元测试
"""

import json
import zipfile
from pathlib import Path

from ruamel.yaml import YAML
from typer.testing import CliRunner

from zippack import __version__
from zippack.cli.main import app


runner = CliRunner()


def make_storage(input_dir: Path) -> Path:
    bundle = input_dir / "Storage" / "FirebaseStorage.framework"
    bundle.mkdir(parents=True)
    (bundle / "FirebaseStorage").write_bytes(b"binary")
    return input_dir / "Storage"


class TestMain:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_info(self):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "sha256" in result.output


class TestReleaseCommand:
    """release 命令测试"""

    def test_release_with_directories(self, tmp_path):
        input_dir = tmp_path / "packaged"
        output_dir = tmp_path / "dist"
        make_storage(input_dir)

        result = runner.invoke(app, ["release", "-i", str(input_dir), "-o", str(output_dir)])

        assert result.exit_code == 0, result.output
        archives = list(output_dir.glob("Storage-*.zip"))
        assert len(archives) == 1
        with zipfile.ZipFile(archives[0]) as zf:
            assert "FirebaseStorage.framework/Info.plist" in zf.namelist()

    def test_release_with_config(self, tmp_path):
        input_dir = tmp_path / "packaged"
        make_storage(input_dir)
        config_path = tmp_path / "release.yaml"
        with open(config_path, 'w', encoding='utf-8') as f:
            YAML().dump({
                "release": {"input_dir": "packaged", "output_dir": "dist"},
                "fingerprint": {"length": 8},
            }, f)

        result = runner.invoke(app, ["release", "-c", str(config_path)])

        assert result.exit_code == 0, result.output
        archives = list((tmp_path / "dist").glob("Storage-*.zip"))
        assert len(archives) == 1
        assert len(archives[0].stem) == len("Storage-") + 8

    def test_release_strip_duplicates(self, tmp_path):
        input_dir = tmp_path / "packaged"
        product = input_dir / "MLVisionFaceModel"
        for name in ["FirebaseMLVisionFaceModel.framework", "Protobuf.framework"]:
            (product / name).mkdir(parents=True)
            (product / name / name.split(".")[0]).write_bytes(b"binary")

        result = runner.invoke(app, [
            "release", "-i", str(input_dir), "-o", str(tmp_path / "dist"), "--strip-duplicates",
        ])

        assert result.exit_code == 0, result.output
        assert not (product / "Protobuf.framework").exists()

    def test_release_requires_directories(self):
        result = runner.invoke(app, ["release", "-i", "only-input"])
        assert result.exit_code == 1

    def test_release_failure(self, tmp_path):
        input_dir = tmp_path / "packaged"
        (input_dir / "Analytics" / "FirebaseCore.framework").mkdir(parents=True)

        result = runner.invoke(app, ["release", "-i", str(input_dir), "-o", str(tmp_path / "dist")])

        assert result.exit_code == 1
        assert "Analytics" in result.output

    def test_release_log_file(self, tmp_path):
        input_dir = tmp_path / "packaged"
        make_storage(input_dir)
        log_file = tmp_path / "logs" / "release.log"

        result = runner.invoke(app, [
            "release", "-i", str(input_dir), "-o", str(tmp_path / "dist"), "--log-file", str(log_file),
        ])

        assert result.exit_code == 0, result.output
        assert "[HASH]" in log_file.read_text(encoding='utf-8')

    def test_release_invalid_config(self, tmp_path):
        config_path = tmp_path / "release.yaml"
        config_path.write_text("release:\n  input_dir: a\n")

        result = runner.invoke(app, ["release", "-c", str(config_path)])

        assert result.exit_code == 1
        assert "output_dir" in result.output


class TestProductsCommand:
    def test_table(self):
        result = runner.invoke(app, ["products"])
        assert result.exit_code == 0
        assert "FirebaseStorage" in result.output

    def test_headers(self):
        result = runner.invoke(app, ["products", "--headers"])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "## Analytics" in lines
        assert "## Storage (~> Analytics)" in lines


class TestValidateCommand:
    def test_valid(self, tmp_path):
        path = tmp_path / "release.yaml"
        path.write_text("release:\n  input_dir: a\n  output_dir: b\n")
        result = runner.invoke(app, ["validate", "-c", str(path)])
        assert result.exit_code == 0

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "release.yaml"
        path.write_text("release:\n  input_dir: a\n")

        result = runner.invoke(app, ["validate", "-c", str(path), "--json"])

        assert result.exit_code == 1
        payload = json.loads(result.output[result.output.index("{"):])
        assert payload["error_count"] == 1

    def test_missing(self, tmp_path):
        result = runner.invoke(app, ["validate", "-c", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1


class TestExampleCommand:
    def test_example(self, tmp_path):
        output = tmp_path / "example.yaml"
        result = runner.invoke(app, ["example", "-o", str(output)])

        assert result.exit_code == 0
        result = runner.invoke(app, ["validate", "-c", str(output)])
        assert result.exit_code == 0
