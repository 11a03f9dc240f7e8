# src/api/schemas.py
from pydantic import BaseModel, Field
from typing import Dict, List, Literal

from engine.models import ScanOptions, ScanTarget


class ScanInput(BaseModel):
    url: str = Field(..., description="Target URL, may contain a FUZZ marker")
    http_method: str = Field("GET", description="HTTP method sqlmap should use")
    form_params: str = Field("", description="Comma separated form parameter names")
    body_params: str = Field("", description="Comma separated JSON body parameter names")
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra request headers")

    def to_target(self) -> ScanTarget:
        return ScanTarget(
            url=self.url,
            http_method=self.http_method,
            form_params=self.form_params,
            body_params=self.body_params,
            headers=dict(self.headers),
        )


class ScanBatchRequest(BaseModel):
    threads: int = Field(1, ge=1, description="sqlmap --threads")
    level: int = Field(1, ge=1, le=5, description="sqlmap --level")
    risk: int = Field(1, ge=1, le=3, description="sqlmap --risk")
    time_based: bool = Field(False, description="Include time-based blind technique")
    url: List[ScanInput]

    def to_options(self) -> ScanOptions:
        return ScanOptions(level=self.level, risk=self.risk, threads=self.threads, time_based=self.time_based)


class ScanResult(BaseModel):
    id: str
    url: str
    vulnerable: bool
    payload: str
    status: Literal["running", "done", "cancelled", "skipped"]


class ScanStatus(BaseModel):
    status: Literal["running", "done", "cancelled", "skipped"]


class ErrorResponse(BaseModel):
    error: str
