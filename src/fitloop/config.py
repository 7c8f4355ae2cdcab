"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

# Default data directory (repository root / data)
DATA_DIR = Path(__file__).parent.parent.parent / "data"


@dataclass(frozen=True)
class Config:
    data_dir: Path = DATA_DIR
    language: str = "ja"
    user_id: str = "default"
    log_format: str = "text"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        data_dir = os.environ.get("FITLOOP_DATA_DIR")

        return cls(
            data_dir=Path(data_dir) if data_dir else DATA_DIR,
            language=os.environ.get("FITLOOP_LANGUAGE", "ja"),
            user_id=os.environ.get("FITLOOP_USER_ID", "default"),
            log_format=os.environ.get("FITLOOP_LOG_FORMAT", "text"),
            log_level=os.environ.get("FITLOOP_LOG_LEVEL", "WARNING").upper(),
        )
