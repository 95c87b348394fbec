"""Tests for the glyphmesh command line interface."""

import json

import numpy as np
import pytest
from typer.testing import CliRunner

import glyphmesh.cli.app as app_module
from glyphmesh import __version__
from glyphmesh.cli.app import app

runner = CliRunner()


@pytest.fixture
def atlas_path(tmp_path):
    path = tmp_path / "font.json"
    path.write_text(
        json.dumps(
            {
                "info": {"face": "Test", "size": 32},
                "common": {"lineHeight": 40, "base": 32, "scaleW": 100, "scaleH": 100},
                "chars": [
                    {"id": 65, "x": 0, "y": 0, "width": 10, "height": 20, "xadvance": 12},
                    {"id": 66, "x": 10, "y": 0, "width": 10, "height": 20, "xadvance": 10},
                ],
            }
        ),
        encoding="utf-8",
    )
    return path


class TestCli:
    """Tests for the glyphmesh commands."""

    def test_version(self):
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_mesh_writes_npz(self, font_path, tmp_path):
        """mesh saves vertices, indices and the vertex stride."""
        out = tmp_path / "out.npz"
        result = runner.invoke(
            app, ["--quiet", "mesh", str(font_path), "HO\\n8", "-s", "32", "-o", str(out)]
        )

        assert result.exit_code == 0, result.output
        data = np.load(out)
        assert int(data["stride"]) == 32
        assert len(data["vertices"]) % 8 == 0
        assert int(data["indices"].max()) < len(data["vertices"]) // 8
        assert data["size"][1] == pytest.approx(2 * 1.2 * 32)

    def test_mesh_summary(self, font_path):
        """Without --quiet a summary is printed."""
        result = runner.invoke(app, ["mesh", str(font_path), "HO"])

        assert result.exit_code == 0, result.output
        assert "triangles" in result.output

    def test_mesh_layout_options(self, font_path, tmp_path):
        """Layout options are passed through to the builder."""
        out = tmp_path / "wrapped.npz"
        result = runner.invoke(
            app,
            [
                "--quiet",
                "mesh",
                str(font_path),
                "HO HO HO",
                "--font-size",
                "1000",
                "--max-width",
                "1500",
                "--align",
                "center",
                "--word-wrap",
                "break-word",
                "-o",
                str(out),
            ],
        )

        assert result.exit_code == 0, result.output
        assert np.load(out)["size"][1] == pytest.approx(3 * 1.2 * 1000)

    def test_mesh_missing_font(self, tmp_path):
        """A missing font exits with status 1."""
        result = runner.invoke(app, ["--quiet", "mesh", str(tmp_path / "missing.ttf"), "A"])
        assert result.exit_code == 1

    def test_mesh_invalid_option(self, font_path):
        """Invalid layout options exit with status 1."""
        result = runner.invoke(app, ["--quiet", "mesh", str(font_path), "A", "--font-size", "0"])
        assert result.exit_code == 1

    def test_atlas_writes_npz(self, atlas_path, tmp_path):
        """atlas saves one quad per glyph."""
        out = tmp_path / "quads.npz"
        result = runner.invoke(app, ["--quiet", "atlas", str(atlas_path), "AB", "-o", str(out)])

        assert result.exit_code == 0, result.output
        data = np.load(out)
        assert int(data["stride"]) == 20
        assert len(data["vertices"]) == 2 * 4 * 5
        assert len(data["indices"]) == 12

    def test_atlas_invalid_descriptor(self, tmp_path):
        """An unrecognized descriptor exits with status 1."""
        path = tmp_path / "bad.json"
        path.write_text("{}", encoding="utf-8")

        result = runner.invoke(app, ["--quiet", "atlas", str(path), "A"])
        assert result.exit_code == 1

    def test_atlas_missing_descriptor(self, tmp_path):
        """A missing descriptor exits with status 1."""
        result = runner.invoke(app, ["--quiet", "atlas", str(tmp_path / "none.json"), "A"])
        assert result.exit_code == 1

    def test_inspect(self, font_path):
        """inspect lists the requested glyphs."""
        result = runner.invoke(app, ["inspect", str(font_path), "--chars", "8O"])

        assert result.exit_code == 0, result.output
        assert "eight" in result.output

    def test_log_file(self, font_path, tmp_path):
        """--log-file writes structured logs."""
        log_file = tmp_path / "run.log"
        result = runner.invoke(
            app,
            ["--quiet", "--log-file", str(log_file), "--log-level", "DEBUG", "mesh", str(font_path), "H"],
        )

        assert result.exit_code == 0, result.output
        assert log_file.exists()
        assert "Geometry built" in log_file.read_text(encoding="utf-8")

    def test_mesh_uses_settings_bundle(self, font_path, monkeypatch):
        """The geometry and layout sections of the settings reach the builder."""
        seen = {}

        class RecordingBuilder(app_module.VectorTextGeometryBuilder):
            def __init__(self, config=None, **kwargs):
                seen["config"] = config
                super().__init__(config=config, **kwargs)

            def build(self, text, font, options=None):
                seen["options"] = options
                return super().build(text, font, options)

        monkeypatch.setattr(app_module, "VectorTextGeometryBuilder", RecordingBuilder)
        result = runner.invoke(
            app, ["--quiet", "mesh", str(font_path), "H", "--tolerance", "2", "-s", "24"]
        )

        assert result.exit_code == 0, result.output
        assert seen["config"].bezier_flatten_tolerance == 2
        assert seen["options"].font_size == 24
