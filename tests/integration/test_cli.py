"""Integration tests for the simple-graticule command line."""

import pytest

from simple_graticule.cli import main
from simple_graticule.config import GraticuleConfig


class TestIntervalCommand:

    @pytest.mark.parametrize("zoom, expected", [
        ("0", "90.0"),
        ("3", "30.0"),
        ("10", "0.1"),
        ("18", "0.001"),
    ])
    def test_prints_interval(self, capsys, zoom, expected):
        assert main(["interval", "--zoom", zoom]) == 0
        assert capsys.readouterr().out.strip().splitlines()[-1] == expected

    def test_explicit_span(self, capsys):
        assert main(["interval", "--zoom", "10", "--span", "0.3"]) == 0
        assert capsys.readouterr().out.strip().splitlines()[-1] == "0.5"

    def test_invalid_span(self, capsys):
        assert main(["interval", "--zoom", "5", "--span", "-1"]) == 1
        assert "Error" in capsys.readouterr().err

    @pytest.mark.parametrize("zoom", ["-1100", "nan"])
    def test_unmeasurable_zoom(self, capsys, zoom):
        assert main(["interval", "--zoom", zoom]) == 1
        assert "Error" in capsys.readouterr().err

    def test_trace_stage(self, capsys):
        assert main(["interval", "--zoom", "3", "--trace", "interval"]) == 0
        out = capsys.readouterr().out
        assert "Selected interval 30.0" in out
        assert out.strip().splitlines()[-1] == "30.0"


class TestRenderCommand:
    """Test rendering previews from the command line."""

    def test_render(self, tmp_path, capsys):
        output = tmp_path / "grid.png"
        code = main([
            "-q", "render",
            "--bounds", "-10", "10", "-7.5", "7.5",
            "--output", str(output),
            "--width", "400", "--height", "300",
        ])
        assert code == 0
        assert output.exists()
        assert "Success!" in capsys.readouterr().out

    def test_render_with_config(self, tmp_path):
        config_path = tmp_path / "graticule.yaml"
        GraticuleConfig(line_color="red", debounce_ms=0).save_to_file(config_path)
        output = tmp_path / "grid.png"

        code = main([
            "render", "--bounds", "0", "100", "-50", "50",
            "--output", str(output), "--config", str(config_path),
            "--no-origin-label", "--align-latitude",
        ])
        assert code == 0
        assert output.exists()

    def test_missing_config(self, tmp_path, capsys):
        code = main([
            "render", "--bounds", "-10", "10", "-5", "5",
            "--output", str(tmp_path / "grid.png"),
            "--config", str(tmp_path / "missing.yaml"),
        ])
        assert code == 1
        assert "not found" in capsys.readouterr().err

    def test_degenerate_bounds(self, tmp_path):
        code = main([
            "render", "--bounds", "10", "-10", "-5", "5",
            "--output", str(tmp_path / "grid.png"),
        ])
        assert code == 1


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out.lower()
