import os
import numpy as np
import pytest
from speedcurve.path_builder import PathBuilder
from speedcurve.render import PathRenderer, save_video
from speedcurve.settings import RenderSettings


def small_settings(**kwargs):
    values = dict(width=160, height=90, fps=10, duration_sec=1.0, margin=10, preview_samples=32)
    values.update(kwargs)
    return RenderSettings(**values)


def test_hex_to_bgr():
    assert RenderSettings.hex_to_bgr("#FF8000") == (0, 128, 255)
    assert RenderSettings.hex_to_bgr("000000") == (0, 0, 0)
    with pytest.raises(ValueError):
        RenderSettings.hex_to_bgr("#FFF")


def test_total_frames():
    assert small_settings().get_total_frames() == 10
    assert small_settings(duration_sec=0.0).get_total_frames() == 1


def test_render_frames_shape_and_count():
    path = PathBuilder.path(lambda t: np.array([t, t * t]), 0.05, 64)
    frames = list(PathRenderer(small_settings()).render(path, reference=lambda t: np.array([t, t * t])))
    assert len(frames) == 10
    for frame in frames:
        assert frame.shape == (90, 160, 3)
        assert frame.dtype == np.uint8


def test_render_marker_moves():
    settings = small_settings(marker_color="#FF0000", curve_color="#FFFFFF")
    path = PathBuilder.path(lambda t: np.array([t, 0.0]), 0.05, 16)
    frames = list(PathRenderer(settings).render(path))
    red = np.array([0, 0, 255], dtype=np.uint8)

    def marker_x(frame):
        xs = np.where(np.all(frame == red, axis=2))[1]
        assert xs.size > 0
        return xs.mean()

    # left to right, y up: the marker starts on the left margin and ends on the right one
    assert marker_x(frames[0]) < 20
    assert marker_x(frames[-1]) > 140
    assert marker_x(frames[0]) < marker_x(frames[5]) < marker_x(frames[-1])


def test_render_scalar_path_is_centered():
    settings = small_settings(marker_color="#00FF00", curve_color="#FFFFFF")
    path = PathBuilder.path(lambda t: t * t, 0.05, 32)
    frame = next(PathRenderer(settings).render(path))
    ys = np.where(np.all(frame == np.array([0, 255, 0], dtype=np.uint8), axis=2))[0]
    assert abs(ys.mean() - 45) <= 1


def test_render_background_color():
    settings = small_settings(background_color="#102030")
    path = PathBuilder.path(lambda t: (t, t), 0.1, 8)
    frame = next(PathRenderer(settings).render(path))
    assert tuple(frame[0, 0]) == (0x30, 0x20, 0x10)


def test_save_video(tmp_path):
    settings = small_settings()
    path = PathBuilder.path(lambda t: np.array([t, 1.0 - t, 0.5]), 0.05, 16)
    out_path = os.path.join(str(tmp_path), "preview.mp4")
    count = save_video(PathRenderer(settings).render(path), out_path, settings.fps, (settings.width, settings.height))
    assert count == settings.get_total_frames()
    assert os.path.exists(out_path)
