"""
test_scene.py: host-facing lifecycle: resize, events, pause/resume, drawing.

Run:
    pytest tests/test_scene.py -v
"""
import pytest

from airtraffic.geo.hit import Hit
from airtraffic.render.scene import AirTrafficScene


@pytest.fixture()
def redraw_log():
    return []


@pytest.fixture()
def scene(map_asset, scheduler, clock, provider, redraw_log):
    s = AirTrafficScene(map_asset, scheduler, lambda: redraw_log.append(1), clock=clock)
    s.attach_resource_provider(provider)
    return s


# ── Resize ───────────────────────────────────────────────────────────────────

class TestResize:

    def test_geometry_unknown_until_resize(self, scene):
        assert scene.geometry is None

    def test_resize_builds_geometry_and_starts_clock(self, scene, scheduler, map_asset):
        scene.on_viewport_resized(1440, 1000)
        assert scene.geometry.x_map_scale == pytest.approx(2.0)
        assert scene.geometry.display_width == 1440
        assert map_asset.scaled_calls == [(1440, 1000)]
        assert scheduler.is_active

    def test_resize_twice_is_idempotent(self, scene, scheduler, map_asset):
        scene.on_viewport_resized(800, 600)
        first = scene.geometry
        scene.on_viewport_resized(800, 600)
        assert scene.geometry == first
        assert scheduler.double_starts == 0
        assert scheduler.is_active
        assert map_asset.scaled_calls == [(800, 600)]

    def test_resize_drops_current_events(self, scene):
        scene.on_viewport_resized(720, 500)
        scene.set_events([Hit("site-a", 0, 0, 0)])
        scene.on_viewport_resized(1000, 700)
        assert len(scene.events) == 0

    @pytest.mark.parametrize("w,h", [(0, 0), (0, 300), (300, -1)])
    def test_empty_viewport_ignored(self, scene, scheduler, w, h):
        scene.on_viewport_resized(w, h)
        assert scene.geometry is None
        assert not scheduler.is_active


# ── Drawing ──────────────────────────────────────────────────────────────────

class TestRenderFrame:

    def test_draw_before_resize_is_noop(self, scene, surface):
        scene.set_events([Hit("site-a", 0, 0, 0)])
        assert scene.render_frame(surface) == []
        assert surface.calls == []

    def test_ops_replayed_on_surface(self, scene, surface, clock):
        scene.on_viewport_resized(720, 500)
        scene.configure(label_height=16.0, label_width=80.0)
        scene.set_events([Hit("site-a", 0.0, 0.0, clock.now - 100)])
        ops = scene.render_frame(surface)
        assert len(ops) == 4
        assert [c[0] for c in surface.calls] == ["image", "text", "image", "image"]

    def test_unknown_site_produces_no_ops(self, scene, surface):
        scene.on_viewport_resized(720, 500)
        scene.set_events([Hit("ghost", 10.0, 10.0, 0)])
        ops = scene.render_frame(surface)
        assert len(ops) == 1

    def test_events_are_snapshotted_per_frame(self, scene, surface, clock):
        scene.on_viewport_resized(720, 500)
        hits = [Hit("site-a", 0, 0, 0)]
        scene.set_events(hits)
        ops = scene.render_frame(surface)
        hits.append(Hit("site-b", 0, 0, 0))
        assert len(ops) == 2
        assert len(scene.render_frame(surface)) == 3

    def test_events_reference_can_be_swapped(self, scene, surface):
        scene.on_viewport_resized(720, 500)
        scene.set_events([Hit("site-a", 0, 0, 0)])
        scene.set_events((Hit("site-a", 0, 0, 0), Hit("site-b", 5, 5, 0)))
        assert len(scene.render_frame(surface)) == 3

    def test_each_frame_counts_toward_fps(self, scene, surface, clock):
        scene.on_viewport_resized(720, 500)
        for _ in range(20):
            clock.advance(60)
            scene.render_frame(surface)
        # 17th frame closes the first window at 1020 ms
        assert scene.fps == pytest.approx(17 / 1.02)


# ── Pause / resume ───────────────────────────────────────────────────────────

class TestPauseResume:

    def test_draws_stop_while_paused(self, map_asset, scheduler, clock, provider, surface):
        draws = []

        def redraw():
            scene.render_frame(surface)
            draws.append(1)

        scene = AirTrafficScene(map_asset, scheduler, redraw, clock=clock)
        scene.attach_resource_provider(provider)
        scene.on_viewport_resized(720, 500)

        scheduler.tick()
        scheduler.tick()
        assert len(draws) == 2

        scene.pause()
        for _ in range(5):
            scheduler.tick()
        assert len(draws) == 2

        scene.resume()
        scheduler.tick()
        assert len(draws) == 3

    def test_fps_listener_forwarded(self, scene, surface, clock):
        seen = []
        scene.add_fps_listener(seen.append)
        scene.on_viewport_resized(720, 500)
        clock.advance(1001)
        scene.render_frame(surface)
        assert len(seen) == 1
