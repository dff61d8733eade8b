import os
from pathlib import Path

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("COLORKEY_DATA_DIR", PROJECT_ROOT / "data"))
INPUTS_DIR = DATA_DIR / "inputs"
OUTPUTS_DIR = DATA_DIR / "outputs"

# Color removal defaults
DEFAULT_TARGET_COLOR = os.getenv("COLORKEY_TARGET_COLOR", "#ffffff")
DEFAULT_TOLERANCE = float(os.getenv("COLORKEY_TOLERANCE", "30"))
MAX_TOLERANCE = 300.0
DEFAULT_WORKERS = int(os.getenv("COLORKEY_WORKERS", "1"))

# Preview canvas: long side is scaled down to this many pixels (0 disables)
DEFAULT_MAX_DIMENSION = int(os.getenv("COLORKEY_MAX_DIMENSION", "600"))

# Decoded images larger than this are rejected before their pixels are read
MAX_IMAGE_PIXELS = int(os.getenv("COLORKEY_MAX_IMAGE_PIXELS", str(40_000_000)))

# Export
DEFAULT_EXPORT_FILENAME = "background-removed.png"

# API settings
MAX_UPLOAD_BYTES = int(os.getenv("COLORKEY_MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))

# Logging
LOG_LEVEL = os.getenv("COLORKEY_LOG_LEVEL", "INFO")
