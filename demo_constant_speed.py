import logging
import math
import numpy as np
from speedcurve.path_builder import PathBuilder
from speedcurve.render import PathRenderer, save_video
from speedcurve.settings import PathSettings, RenderSettings, Accuracy

def eased_spiral(t):
    """A spiral whose parameter moves slowly at both ends (smoothstep easing)."""
    e = t * t * (3.0 - 2.0 * t)
    angle = e * 4.0 * math.pi
    radius = 0.2 + 0.8 * e
    return np.array([radius * math.cos(angle), radius * math.sin(angle)])

def main():
    logging.basicConfig(level=logging.DEBUG,
                        format="[%(asctime)s][%(name)s][%(levelname)s] %(message)s",
                        datefmt=r"%H:%M:%S")

    # 1. Build the constant-speed path
    print("Building path...")
    path_settings = PathSettings(minimum_speed=0.02, accuracy=Accuracy.FINE, length_accuracy=Accuracy.ULTRA)
    path = PathBuilder.from_settings(eased_spiral, path_settings)
    print(f"Curve length ~{path.length:.4f}, {len(path.points)} resampled points.")

    # 2. Render both markers: red = constant speed, blue = original parameter
    print("Rendering...")
    render_settings = RenderSettings(width=960, height=540, fps=30, duration_sec=6.0)
    renderer = PathRenderer(render_settings)
    frames = renderer.render(path, reference=eased_spiral)

    out_path = "constant_speed_demo.mp4"
    count = save_video(frames, out_path, render_settings.fps, (render_settings.width, render_settings.height))
    print(f"Done! Saved {count} frames to {out_path}")

if __name__ == "__main__":
    main()
