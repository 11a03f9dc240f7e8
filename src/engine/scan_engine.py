# src/engine/scan_engine.py
import asyncio
import logging
import shlex

from engine.config import Settings
from engine.models import JobOutcome, JobStatus, ScanOptions, ScanTarget
from tools.base import SecurityToolAdapter


def _kill(job_id, proc):
    if proc.returncode is not None:
        return
    try:
        proc.kill()
    except ProcessLookupError:
        pass
    except OSError as e:
        logging.warning(f"[job_id={job_id}] Failed to kill sqlmap process {proc.pid}: {e}")


async def _reap(job_id, proc, communicate, grace):
    try:
        await asyncio.wait_for(communicate, timeout=grace)
    except asyncio.TimeoutError:
        logging.warning(
            f"[job_id={job_id}] sqlmap process {proc.pid} still alive {grace}s after kill, leaving it orphaned."
        )
    except Exception as e:
        logging.debug(f"[job_id={job_id}] Error while reaping sqlmap process: {e}")


async def run_job(
    job_id: str,
    target: ScanTarget,
    options: ScanOptions,
    cancel_event: asyncio.Event,
    adapter: SecurityToolAdapter,
    settings: Settings,
) -> JobOutcome:
    """
    Run one scan: launch sqlmap and race its exit against the job's cancel event.

    Returns a terminal outcome. Launch failures are folded into the output text,
    so the job still ends as done with no finding.
    """
    command = adapter.build_command(target, options)
    if command is None:
        logging.info(f"[job_id={job_id}] No form/body params and no FUZZ marker in url, skipping.")
        return JobOutcome(status=JobStatus.SKIPPED)

    argv = list(settings.sqlmap_command) + command.args
    logging.info(f"[job_id={job_id}] sqlmap command: {shlex.join(argv)}")

    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except OSError as e:
        logging.error(f"[job_id={job_id}] Failed to start sqlmap: {e}")
        return adapter.parse_output(f"failed to start {argv[0]}: {e}")

    communicate = asyncio.ensure_future(proc.communicate())
    cancelled = asyncio.ensure_future(cancel_event.wait())
    try:
        finished, _ = await asyncio.wait({communicate, cancelled}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        # runner task itself was cancelled (shutdown)
        cancelled.cancel()
        _kill(job_id, proc)
        await _reap(job_id, proc, communicate, settings.kill_grace_seconds)
        raise

    if cancelled in finished:
        _kill(job_id, proc)
        await _reap(job_id, proc, communicate, settings.kill_grace_seconds)
        return JobOutcome(status=JobStatus.CANCELLED)

    cancelled.cancel()
    stdout, _ = communicate.result()
    output = stdout.decode("utf-8", errors="replace") if stdout else ""
    logging.debug(f"[job_id={job_id}] sqlmap exited with {proc.returncode}, output:\n{output}")
    return adapter.parse_output(output)
