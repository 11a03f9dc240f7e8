import sys

import pytest

from engine.config import Settings
from engine.job_registry import JobRegistry
from engine.models import ScanOptions, ScanTarget
from tools.sqlmap_adapter import SqlmapAdapter

# stand-ins for sqlmap, run as `python -c <script> <sqlmap args...>`
VULNERABLE_TOOL = "print('[INFO] testing'); print(\"    Payload: id=1' OR '1'='1\"); print('[INFO] done')"
CLEAN_TOOL = "print('[WARNING] all tested parameters do not appear to be injectable')"
SLOW_TOOL = "import time; time.sleep(30)"


def tool_settings(script, kill_grace_seconds=5.0):
    return Settings(sqlmap_command=[sys.executable, "-c", script], kill_grace_seconds=kill_grace_seconds)


@pytest.fixture
def registry():
    return JobRegistry()


@pytest.fixture
def adapter():
    return SqlmapAdapter()


@pytest.fixture
def options():
    return ScanOptions(level=2, risk=1, threads=3, time_based=False)


@pytest.fixture
def fuzz_target():
    return ScanTarget(url="http://testphp.local/artists.php?artist=FUZZ")
