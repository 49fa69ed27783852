
import logging
import cv2
import numpy as np
from typing import Callable, Generator, Iterable, List, Optional, Tuple

from .path_sampler import PathSampler
from .points import point_ops
from .settings import RenderSettings

logger = logging.getLogger(__name__)


class PathRenderer:
    """
    Renders preview animations of a path: the curve itself plus a marker
    travelling along it, and optionally a second marker following a
    reference function (e.g. the original curve) for comparison.
    """
    def __init__(self, settings: Optional[RenderSettings] = None):
        self.settings = settings or RenderSettings()
        self.canvas = np.zeros((self.settings.height, self.settings.width, 3), dtype=np.uint8)

    def _project(self, values: List) -> np.ndarray:
        ops = point_ops(values[0], "render")
        return np.array([ops.to_xy(ops.coerce(v)) for v in values], dtype=np.float64)

    def _fit(self, xy: np.ndarray) -> Callable[[np.ndarray], np.ndarray]:
        """Maps curve coordinates into the canvas, keeping the aspect ratio (y up)."""
        s = self.settings
        lo = xy.min(axis=0)
        span = xy.max(axis=0) - lo
        avail = np.array([s.width - 2 * s.margin, s.height - 2 * s.margin], dtype=np.float64)

        # flat dimensions (scalar paths, straight lines) don't constrain the scale
        ratios = [avail[i] / span[i] for i in range(2) if span[i] > 0]
        scale = min(ratios) if ratios else 1.0
        offset = (np.array([s.width, s.height], dtype=np.float64) - span * scale) / 2.0

        def to_pixels(points: np.ndarray) -> np.ndarray:
            px = (points - lo) * scale + offset
            px[..., 1] = s.height - px[..., 1]
            return np.rint(px).astype(np.int32)

        return to_pixels

    def render(self,
               path: Callable,
               reference: Optional[Callable] = None) -> Generator[np.ndarray, None, None]:
        """
        Yields frames for the animation, u going from 0 to 1 over the
        configured duration.
        """
        s = self.settings
        total_frames = s.get_total_frames()

        preview = PathSampler.bake(path, max(2, s.preview_samples))
        curve_xy = self._project(preview)
        to_pixels = self._fit(curve_xy)

        # static background with the curve drawn once
        self.canvas[:] = RenderSettings.hex_to_bgr(s.background_color)
        cv2.polylines(self.canvas, [to_pixels(curve_xy).reshape(-1, 1, 2)], False,
                      RenderSettings.hex_to_bgr(s.curve_color), s.stroke_width, cv2.LINE_AA)

        marker_color = RenderSettings.hex_to_bgr(s.marker_color)
        reference_color = RenderSettings.hex_to_bgr(s.reference_color)
        logger.debug("render: %d frames at %dx%d", total_frames, s.width, s.height)

        for frame_idx in range(total_frames):
            u = frame_idx / (total_frames - 1) if total_frames > 1 else 1.0
            frame = self.canvas.copy()

            if reference is not None:
                ref_px = to_pixels(self._project([reference(u)]))[0]
                cv2.circle(frame, (int(ref_px[0]), int(ref_px[1])), s.marker_radius, reference_color, -1, cv2.LINE_AA)

            pos_px = to_pixels(self._project([path(u)]))[0]
            cv2.circle(frame, (int(pos_px[0]), int(pos_px[1])), s.marker_radius, marker_color, -1, cv2.LINE_AA)

            yield frame


def save_video(frames: Iterable[np.ndarray], out_path: str, fps: float, size: Tuple[int, int]) -> int:
    """Writes frames to an mp4 file, returns the number of frames written."""
    fourcc = cv2.VideoWriter_fourcc(*'mp4v')
    out = cv2.VideoWriter(out_path, fourcc, float(fps), size)
    count = 0
    try:
        for frame in frames:
            out.write(frame)
            count += 1
    finally:
        out.release()
    logger.debug("save_video: wrote %d frames to %s", count, out_path)
    return count
