# src/engine/config.py
import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_SQLMAP_PYTHON = "python3"
DEFAULT_SQLMAP_PATH = "./sqlmap/sqlmap.py"


@dataclass
class Settings:
    # argv prefix used to start sqlmap; scan arguments are appended to it
    sqlmap_command: List[str] = field(
        default_factory=lambda: [DEFAULT_SQLMAP_PYTHON, DEFAULT_SQLMAP_PATH]
    )
    kill_grace_seconds: float = 5.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        python = os.environ.get("SQLMAP_PYTHON", DEFAULT_SQLMAP_PYTHON)
        path = os.environ.get("SQLMAP_PATH", DEFAULT_SQLMAP_PATH)
        return cls(
            sqlmap_command=[python, path],
            kill_grace_seconds=float(os.environ.get("SQLMAP_KILL_GRACE_SECONDS", "5")),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
