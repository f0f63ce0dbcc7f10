"""Tests for display settings and progress colouring."""

import pytest

from routeplot.render.colors import from_hex, progress, progress_color, to_hex
from routeplot.render.settings import DEFAULT_CONFIG_PATH, DisplaySettings


class TestProgressColor:
    """Tests for the blue-magenta-red ramp."""

    def test_endpoints(self):
        assert progress_color(0.0) == (0, 0, 255)
        assert progress_color(0.5) == (255, 0, 255)
        assert progress_color(1.0) == (255, 0, 0)

    def test_quarters(self):
        assert progress_color(0.25) == (127, 0, 255)
        assert progress_color(0.75) == (255, 0, 127)

    def test_progress(self):
        assert progress(0, 1) == 0.0
        assert progress(0, 5) == 0.0
        assert progress(2, 5) == 0.5
        assert progress(4, 5) == 1.0


class TestHexColors:
    """Tests for colour string conversion."""

    def test_to_hex(self):
        assert to_hex((255, 0, 16)) == "#ff0010"

    def test_from_hex(self):
        assert from_hex("#dddddd") == (221, 221, 221)
        assert from_hex("ff0010") == (255, 0, 16)

    def test_invalid(self):
        with pytest.raises(ValueError):
            from_hex("#fff")
        with pytest.raises(ValueError):
            from_hex("#gggggg")


class TestDisplaySettings:
    """Tests for YAML-backed settings."""

    def test_packaged_file(self):
        assert DEFAULT_CONFIG_PATH.exists()
        settings = DisplaySettings()

        assert settings.hold_radius == 2.0
        assert settings.label_interval == 0.25
        assert settings.marker_radius == 1
        assert settings.highlight_radius == 4
        assert settings.font_size == 12

    def test_missing_file_uses_defaults(self, tmp_path):
        settings = DisplaySettings(tmp_path / "absent.yaml")
        assert settings.nm_per_deg_lat == pytest.approx(60.007)
        assert settings.fix_label_offset == 4

    def test_partial_override(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("markers:\n  highlight_radius: 6\nfont:\n  family: Consolas\n")
        settings = DisplaySettings(config)

        assert settings.highlight_radius == 6
        assert settings.marker_radius == 1
        assert settings.font_family == "Consolas"
        assert settings.font_size == 12

    def test_malformed_yaml(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("markers: [unclosed\n")
        settings = DisplaySettings(config)
        assert settings.highlight_radius == 4

    def test_not_a_mapping(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("- just\n- a list\n")
        settings = DisplaySettings(config)
        assert settings.label_interval == 0.25

    def test_reload(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("lines:\n  stroke_width: 2\n")
        settings = DisplaySettings(config)
        assert settings.stroke_width == 2.0

        config.write_text("lines:\n  stroke_width: 3\n")
        settings.reload()
        assert settings.stroke_width == 3.0
