"""Runtime configuration, read from the environment (and a .env file)."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Default data directory: data/ next to the salesbook package directory
_DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass
class Config:
    data_dir: Path = _DEFAULT_DATA_DIR
    log_path: Optional[Path] = None        # defaults to salesbook.log beside data_dir
    telegram_token: Optional[str] = None   # Telegram front-end is off without it

    def __post_init__(self):
        self.data_dir = Path(self.data_dir)
        if self.log_path is None:
            self.log_path = self.data_dir.parent / "salesbook.log"
        else:
            self.log_path = Path(self.log_path)

    @classmethod
    def from_env(cls, load_env_file=True):
        if load_env_file:
            load_dotenv()
        return cls(
            data_dir=os.getenv("SALESBOOK_DATA_DIR") or _DEFAULT_DATA_DIR,
            log_path=os.getenv("SALESBOOK_LOG_PATH") or None,
            telegram_token=os.getenv("TELEGRAM_TOKEN") or None,
        )
