from dataclasses import dataclass
from typing import Optional, Tuple
from enum import Enum

class Accuracy(Enum):
    # sample counts used when baking a curve
    DRAFT = 16
    STANDARD = 64
    FINE = 256
    ULTRA = 1024

@dataclass
class PathSettings:
    minimum_speed: float = 0.05  # distance between resampled points
    accuracy: Accuracy = Accuracy.STANDARD
    length_accuracy: Optional[Accuracy] = None  # separate sample count for the length pass

    def get_samples(self) -> int:
        return self.accuracy.value

    def get_length_samples(self) -> Optional[int]:
        if self.length_accuracy is None:
            return None
        return self.length_accuracy.value

@dataclass
class RenderSettings:
    width: int = 640
    height: int = 360
    fps: int = 30
    duration_sec: float = 4.0
    margin: int = 24 # pixels kept free around the curve

    background_color: str = "#FFFFFF"
    curve_color: str = "#C8C8C8"
    marker_color: str = "#D62828"
    reference_color: str = "#1D3557"

    stroke_width: int = 2
    marker_radius: int = 6
    preview_samples: int = 256

    def get_total_frames(self) -> int:
        return max(1, int(self.duration_sec * self.fps))

    @staticmethod
    def hex_to_bgr(color: str) -> Tuple[int, int, int]:
        value = color.lstrip("#")
        if len(value) != 6:
            raise ValueError(f"Expected a '#RRGGBB' color, got {color!r}")
        r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
        return (b, g, r)
