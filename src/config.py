"""Configuration loaded from .env"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).parent.parent / ".env")

# Trigger correlation
MIN_SAMPLE_SIZE = int(os.getenv("TRIGGER_MIN_SAMPLES", "3"))
TOP_N_DISPLAY = int(os.getenv("TRIGGER_TOP_N", "5"))

# Environmental thresholds (hPa)
SUDDEN_PRESSURE_CHANGE_HPA = float(os.getenv("SUDDEN_PRESSURE_CHANGE_HPA", "6.0"))
DEFAULT_PRESSURE_HPA = float(os.getenv("DEFAULT_PRESSURE_HPA", "1013.0"))
