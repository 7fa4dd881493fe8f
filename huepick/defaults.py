"""Central place for huepick default settings."""

# Channel domains
RGB_MAX: int = 255
ALPHA_MAX: int = 255
HUE_MAX: int = 360
SATURATION_MAX: int = 100
VALUE_MAX: int = 100

# Gradient track
TRACK_MAX_VALUE: int = 255
MAX_HANDLES: int = 16
SINGLE_HANDLE_VALUE: int = 128  # Lone handle sits mid-track
MARKER_SIZE: int = 7  # Handle triangle size in pixels (odd)
MARKER_HALF_LENGTH: int = (MARKER_SIZE - 1) // 2

# Color wheel
WHEEL_TESSELATION: int = 80  # Hue samples around the ring
WHEEL_KEEPS_VALUE: bool = False

# Compositing
DEFAULT_BACKDROP: tuple[int, int, int] = (0, 0, 0)
ALPHA_MIN_COLOR: tuple[int, int, int] = (0, 0, 0)

# Picker session
DEFAULT_COLOR: tuple[int, int, int] = (255, 255, 255)
DEFAULT_ALPHA: int = 255
DEFAULT_ROUND_CHANNELS: bool = False  # Truncating HSV -> RGB
