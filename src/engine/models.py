# src/engine/models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class JobStatus(str, Enum):
    RUNNING = "running"
    DONE = "done"
    CANCELLED = "cancelled"
    SKIPPED = "skipped"

    @property
    def is_terminal(self) -> bool:
        return self is not JobStatus.RUNNING


@dataclass(frozen=True)
class ScanTarget:
    url: str
    http_method: str = "GET"
    form_params: str = ""  # comma separated parameter names
    body_params: str = ""  # comma separated parameter names, sent as JSON
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ScanOptions:
    level: int = 1
    risk: int = 1
    threads: int = 1
    time_based: bool = False


@dataclass(frozen=True)
class JobOutcome:
    status: JobStatus
    vulnerable: bool = False
    payload: str = ""


@dataclass(frozen=True)
class Job:
    id: str
    url: str
    target: ScanTarget
    status: JobStatus = JobStatus.RUNNING
    vulnerable: bool = False
    payload: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "vulnerable": self.vulnerable,
            "payload": self.payload,
            "status": self.status.value,
        }
