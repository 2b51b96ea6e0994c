"""Runtime configuration read from the environment.

A ``.env`` file in the working directory is loaded first, so local
settings can live next to the data without exporting variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    optimizer_url: str
    optimizer_timeout: float
    log_level: str
    currency: str


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        data_dir=Path(os.getenv("PRINTOPS_DATA_DIR", str(_DEFAULT_DATA_DIR))),
        optimizer_url=os.getenv("PRINTOPS_OPTIMIZER_URL", "http://localhost:8080/optimize"),
        optimizer_timeout=float(os.getenv("PRINTOPS_OPTIMIZER_TIMEOUT", "30")),
        log_level=os.getenv("PRINTOPS_LOG_LEVEL", "INFO").upper(),
        currency=os.getenv("PRINTOPS_CURRENCY", "USD"),
    )
