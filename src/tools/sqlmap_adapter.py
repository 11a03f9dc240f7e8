# src/tools/sqlmap_adapter.py
from dataclasses import dataclass
from typing import List, Optional

from .base import SecurityToolAdapter
from engine.models import JobOutcome, JobStatus, ScanOptions, ScanTarget
from utils.scripts_utils import (
    build_form_data,
    build_json_data,
    has_fuzz_marker,
    replace_fuzz_marker,
)

PAYLOAD_PREFIX = "Payload:"
TECHNIQUES = "BEUSQ"
TECHNIQUES_TIME_BASED = "BEUSTQ"


@dataclass
class SqlmapCommand:
    args: List[str]
    data: Optional[str] = None


def extract_payload(output: str) -> str:
    for line in output.split("\n"):
        line = line.strip()
        if line.startswith(PAYLOAD_PREFIX):
            return line[len(PAYLOAD_PREFIX):].strip()
    return ""


class SqlmapAdapter(SecurityToolAdapter):
    def build_command(self, target: ScanTarget, options: ScanOptions) -> Optional[SqlmapCommand]:
        headers = [f"{key}: {value}" for key, value in target.headers.items()]

        data = None
        if target.body_params:
            data = build_json_data(target.body_params)
            headers.append("Content-Type: application/json")
        elif target.form_params:
            data = build_form_data(target.form_params)

        url = target.url
        if not data and not has_fuzz_marker(url):
            # nothing sqlmap could inject into
            return None
        if has_fuzz_marker(url):
            url = replace_fuzz_marker(url)

        technique = TECHNIQUES_TIME_BASED if options.time_based else TECHNIQUES
        args = ["-u", url]
        if data:
            args += ["--data", data]
        args += [
            "--batch",
            "--stop",
            f"--level={options.level}",
            f"--risk={options.risk}",
            f"--threads={options.threads}",
            f"--technique={technique}",
            f"--method={target.http_method.upper()}",
        ]
        args += [f"--headers={h}" for h in headers]
        return SqlmapCommand(args=args, data=data)

    def parse_output(self, output: str) -> JobOutcome:
        payload = extract_payload(output)
        return JobOutcome(status=JobStatus.DONE, vulnerable=bool(payload), payload=payload)
