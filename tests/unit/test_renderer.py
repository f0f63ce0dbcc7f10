"""Tests for the route renderer.

Uses the linear projection from conftest: 10 px per degree with (0, 0) at
pixel (500, 500) in a 1000x1000 viewport, so path labels are spaced every
250 px with the default settings.
"""

import pytest

from routeplot.render.renderer import RouteRenderer, segment_angle
from routeplot.render.settings import DisplaySettings
from routeplot.render.surface import PixelPoint
from routeplot.route.model import Discontinuity, Hold, Waypoint


BLUE = (0, 0, 255)
MAGENTA = (255, 0, 255)
RED = (255, 0, 0)


@pytest.fixture
def settings(tmp_path):
    # Missing file: built-in defaults only
    return DisplaySettings(tmp_path / "absent.yaml")


@pytest.fixture
def renderer(settings):
    return RouteRenderer(settings)


def along_equator(*lons):
    return [Waypoint(0.0, lon) for lon in lons]


class TestSegmentAngle:
    """Tests for upright label angles."""

    def test_horizontal(self):
        assert segment_angle(PixelPoint(0, 0), PixelPoint(10, 0)) == pytest.approx(0)

    def test_leftward_stays_upright(self):
        assert segment_angle(PixelPoint(10, 0), PixelPoint(0, 0)) == pytest.approx(0)

    def test_rising(self):
        # Screen y grows downwards
        assert segment_angle(PixelPoint(0, 10), PixelPoint(10, 0)) == pytest.approx(0.785398, abs=1e-6)

    def test_vertical(self):
        assert segment_angle(PixelPoint(0, 10), PixelPoint(0, 0)) == pytest.approx(1.570796, abs=1e-6)
        assert segment_angle(PixelPoint(0, 0), PixelPoint(0, 10)) == pytest.approx(-1.570796, abs=1e-6)


class TestLines:
    """Tests for progress-coloured route lines."""

    def test_gradient_colours(self, renderer, canvas, projection):
        stats = renderer.render([("R", along_equator(0, 10, 20))], canvas, projection)

        lines = canvas.named("gradient_line")
        assert stats.lines == 2
        assert lines[0] == (PixelPoint(500, 500), PixelPoint(600, 500), BLUE, MAGENTA)
        assert lines[1] == (PixelPoint(600, 500), PixelPoint(700, 500), MAGENTA, RED)

    def test_discontinuity_breaks_line(self, renderer, canvas, projection):
        route = along_equator(0, 10) + [Discontinuity()] + along_equator(20, 30)
        stats = renderer.render([("R", route)], canvas, projection)

        lines = canvas.named("gradient_line")
        assert stats.lines == 2
        assert lines[0][:2] == (PixelPoint(500, 500), PixelPoint(600, 500))
        assert lines[1][:2] == (PixelPoint(700, 500), PixelPoint(800, 500))

    def test_single_waypoint(self, renderer, canvas, projection):
        stats = renderer.render([("R", along_equator(0))], canvas, projection)
        assert stats.lines == 0
        assert stats.markers == 1

    def test_clip_set_and_reset(self, renderer, canvas, projection):
        renderer.render([("R", along_equator(0, 10))], canvas, projection)

        assert canvas.calls[0] == ("set_clip", (projection.viewport(),))
        assert [name for name, _ in canvas.calls[-2:]] == ["reset_transform", "reset_clip"]
        assert canvas.clip is None

    def test_clip_reset_on_error(self, renderer, canvas, projection):
        def fail(*args):
            raise RuntimeError("device lost")

        canvas.draw_gradient_line = fail

        with pytest.raises(RuntimeError):
            renderer.render([("R", along_equator(0, 10))], canvas, projection)

        assert canvas.calls[-1] == ("reset_clip", ())


class TestHolds:
    """Tests for hold drawing from the renderer."""

    def test_hold_drawn(self, renderer, canvas, projection):
        route = [Waypoint(0.0, 0.0, hold=Hold(length=4, course=90)), Waypoint(0.0, 10.0)]
        stats = renderer.render([("R", route)], canvas, projection)

        arcs = canvas.named("arc")
        assert stats.holds == 1
        assert len(arcs) == 2
        assert arcs[0][4] == BLUE

    def test_zero_length_hold_skipped(self, renderer, canvas, projection):
        route = [Waypoint(0.0, 0.0, hold=Hold(length=0, course=90))]
        stats = renderer.render([("R", route)], canvas, projection)

        assert stats.holds == 0
        assert canvas.named("arc") == []


class TestPathLabels:
    """Tests for route-name labels along segments."""

    def test_even_spacing(self, renderer, canvas, projection):
        stats = renderer.render([("R1", along_equator(-40, 40))], canvas, projection)

        texts = [args for args in canvas.named("text") if args[0] == "R1"]
        assert stats.path_labels == 3
        assert [t[1].x for t in texts] == pytest.approx([350, 600, 850])
        assert all(t[1].y == pytest.approx(500) for t in texts)

    def test_labels_drawn_rotated(self, renderer, canvas, projection):
        renderer.render([("R1", along_equator(-40, 40))], canvas, projection)

        text = canvas.named("text")[0]
        point, angle = text[2]
        assert point == text[1]
        assert angle == pytest.approx(0)

    def test_distance_carries_across_discontinuity(self, renderer, canvas, projection):
        route = along_equator(-40, -20) + [Discontinuity()] + along_equator(0, 20)
        stats = renderer.render([("R1", route)], canvas, projection)

        texts = [args for args in canvas.named("text") if args[0] == "R1"]
        assert stats.path_labels == 1
        assert texts[0][1].x == pytest.approx(550)

    def test_distance_resets_per_route(self, renderer, canvas, projection):
        routes = [("R1", along_equator(-40, -20)), ("R2", along_equator(0, 20))]
        stats = renderer.render(routes, canvas, projection)
        assert stats.path_labels == 0

    def test_segment_ending_outside_view(self, renderer, canvas, projection):
        stats = renderer.render([("R1", along_equator(-40, 60))], canvas, projection)
        assert stats.lines == 1
        assert stats.path_labels == 0

    def test_interval_from_settings(self, tmp_path, canvas, projection):
        config = tmp_path / "settings.yaml"
        config.write_text("path_labels:\n  interval: 0.5\n")
        renderer = RouteRenderer(DisplaySettings(config))

        stats = renderer.render([("R1", along_equator(-40, 40))], canvas, projection)
        assert stats.path_labels == 1


class TestFixLabels:
    """Tests for markers and non-overlapping fix labels."""

    def test_marker_radius(self, renderer, canvas, projection):
        route = [Waypoint(0.0, 0.0), Waypoint(0.0, 10.0, highlight=True)]
        renderer.render([("R", route)], canvas, projection)

        radii = [args[1] for args in canvas.named("circle")]
        assert radii == [1, 4]

    def test_label_origin(self, renderer, canvas, projection):
        route = [Waypoint(0.0, 0.0, label="AAA"), Waypoint(0.0, 10.0, highlight=True, label="BBB")]
        renderer.render([("R", route)], canvas, projection)

        origins = {args[0]: args[1] for args in canvas.named("text")}
        assert origins["AAA"] == PixelPoint(505, 494)
        assert origins["BBB"] == PixelPoint(608, 494)

    def test_overlapping_label_dropped(self, renderer, canvas, projection):
        route = [
            Waypoint(0.0, 0.0, label="AAA"),
            Waypoint(0.0, 1.0, label="BBB"),
            Waypoint(0.0, 20.0, label="CCC"),
        ]
        stats = renderer.render([("R", route)], canvas, projection)

        drawn = [args[0] for args in canvas.named("text")]
        assert "AAA" in drawn
        assert "BBB" not in drawn
        assert "CCC" in drawn
        assert stats.fix_labels == 2
        assert stats.dropped_labels == 1

    def test_overlap_checked_across_routes(self, renderer, canvas, projection):
        routes = [
            ("R1", [Waypoint(0.0, 0.0, label="AAA")]),
            ("R2", [Waypoint(0.0, 0.5, label="BBB")]),
        ]
        stats = renderer.render(routes, canvas, projection)

        assert stats.fix_labels == 1
        assert stats.dropped_labels == 1

    def test_discontinuity_has_no_marker(self, renderer, canvas, projection):
        route = along_equator(0) + [Discontinuity()] + along_equator(10)
        stats = renderer.render([("R", route)], canvas, projection)
        assert stats.markers == 2
