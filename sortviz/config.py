import json
import logging
import os

from .engines import ENGINES, DEFAULT_ENGINE

log = logging.getLogger(__name__)

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

WINDOW_WIDTH  = 1100
WINDOW_HEIGHT = 680
FPS           = 60

MIN_ARRAY_SIZE     = 10
MAX_ARRAY_SIZE     = 100
DEFAULT_ARRAY_SIZE = 50

MIN_SPEED     = 0.1
MAX_SPEED     = 20.0
DEFAULT_SPEED = 1.0

# STEP_DELAY — seconds a step is held on screen at speed 1.0.
#   The actual delay is STEP_DELAY / speed.
STEP_DELAY = 0.05

# Bar values are drawn uniformly from [BAR_MIN, BAR_MAX].
BAR_MIN = 10
BAR_MAX = 200

# ============================================================
# ====================== SOUND SETTINGS ======================
# ============================================================
#
# Each touched value plays a short sine tone:
#   freq = BASE_FREQ + (value / BAR_MAX) * FREQ_SPAN
# which spans B-flat 2 (116.54 Hz) up to B-flat 4 (466.16 Hz).
BASE_FREQ     = 116.54
FREQ_SPAN     = 349.62
TONE_DURATION = 0.1
# Linear fade-in / fade-out length in seconds, avoids clicks.
TONE_RAMP     = 0.01
TONE_AMPLITUDE = 0.5
SAMPLE_RATE   = 44100
ENABLE_SOUND  = True

# ============================================================
# ========================= UI THEME =========================
# ============================================================

UI_BG         = (8,   8,  14)
UI_PANEL      = (14, 14,  22)
UI_PANEL2     = (22, 22,  36)
UI_ACCENT     = (255, 55,  55)
UI_TEXT       = (215, 215, 228)
UI_SUBTEXT    = (105, 105, 130)
UI_HOVER      = (30,  22,  38)
UI_BORDER     = (38,  38,  58)

BAR_UNSORTED  = (90, 140, 255)
BAR_COMPARING = (255, 60, 60)
BAR_SORTED    = (60, 200, 100)

# JSON file used to remember the last session's settings
SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".sortviz", "settings.json")


def _clamp(v, lo, hi):
    return max(lo, min(hi, v))


class Settings:
    """What the control panel remembers between sessions."""

    def __init__(self, size=DEFAULT_ARRAY_SIZE, speed=DEFAULT_SPEED,
                 algorithm=DEFAULT_ENGINE, sound=ENABLE_SOUND):
        self.size      = int(_clamp(int(size), MIN_ARRAY_SIZE, MAX_ARRAY_SIZE))
        self.speed     = float(_clamp(float(speed), MIN_SPEED, MAX_SPEED))
        self.algorithm = algorithm if algorithm in ENGINES else DEFAULT_ENGINE
        self.sound     = bool(sound)

    def to_dict(self) -> dict:
        return dict(size=self.size, speed=self.speed,
                    algorithm=self.algorithm, sound=self.sound)

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        defaults = cls().to_dict()
        merged = {k: data.get(k, v) for k, v in defaults.items()}
        return cls(**merged)

    def __eq__(self, other):
        return isinstance(other, Settings) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Settings({self.to_dict()!r})"


def load_settings(path=None) -> Settings:
    """Read saved settings; a missing or broken file gives the defaults."""
    path = path or SETTINGS_PATH
    if not os.path.exists(path):
        return Settings()
    try:
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("settings file must hold a JSON object")
        return Settings.from_dict(data)
    except (OSError, ValueError, TypeError) as e:
        log.warning("ignoring settings file %s: %s", path, e)
        return Settings()


def save_settings(settings: Settings, path=None) -> bool:
    path = path or SETTINGS_PATH
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, "w") as f:
            json.dump(settings.to_dict(), f, indent=2)
        return True
    except OSError as e:
        log.warning("could not save settings to %s: %s", path, e)
        return False
