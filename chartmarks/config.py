import os
from typing import Set, Tuple

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_TARGET_SIZE: Tuple[int, int] = (800, 600)
DEFAULT_AREA_DIVISOR: float = 1000.0
DEFAULT_CONCURRENCY: int = 4
DEFAULT_IMAGE_EXTENSIONS = ".png,.jpg,.jpeg,.bmp,.gif,.webp,.tif,.tiff"


def target_size() -> Tuple[int, int]:
    return (
        int(os.getenv("TARGET_WIDTH", str(DEFAULT_TARGET_SIZE[0]))),
        int(os.getenv("TARGET_HEIGHT", str(DEFAULT_TARGET_SIZE[1]))),
    )


def area_divisor(default: float = DEFAULT_AREA_DIVISOR) -> float:
    return float(os.getenv("MIN_AREA_DIVISOR", str(default)))


def batch_concurrency() -> int:
    return int(os.getenv("BATCH_CONCURRENCY", str(DEFAULT_CONCURRENCY)))


def valid_image_extensions() -> Set[str]:
    raw = os.getenv("VALID_IMAGE_EXTENSIONS") or DEFAULT_IMAGE_EXTENSIONS
    return {ext.strip().lower() for ext in raw.split(",") if ext.strip()}


def log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()
