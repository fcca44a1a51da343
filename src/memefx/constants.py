"""Fixed geometry and default arguments for the animated effects."""

from dataclasses import dataclass

# trigger: canvas, overlay band and jitter spreads
TRIGGER_WIDTH = 256
TRIGGER_HEIGHT = 310
TRIGGER_BAND_HEIGHT = 54
TRIGGER_IMAGE_JITTER = 20
TRIGGER_BAND_JITTER = 10
TRIGGER_FRAMES = 9
TRIGGER_DELAY_MS = 15
TRIGGER_TINT = "#FF000033"
TRIGGER_ASSET = "triggered"


@dataclass(frozen=True)
class RGBArgs:
    """Arguments for ``rgb``. Frozen so shared defaults can't be mutated."""

    colors: tuple[str, ...] = ("#FF0000", "#00FF00", "#0000FF")
    width: int = 256
    height: int = 256
    delay: int = 15


DEFAULT_RGB_ARGS = RGBArgs()
