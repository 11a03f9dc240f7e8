# src/engine/scan_service.py
"""
ScanService: turns a submitted batch into registry jobs and starts one asyncio
task per job without waiting for any of them.
"""
import asyncio
import logging
from typing import List, Set

from engine import scan_engine
from engine.config import Settings
from engine.job_registry import JobRegistry
from engine.models import Job, JobOutcome, JobStatus, ScanOptions, ScanTarget
from tools.base import SecurityToolAdapter


class ScanService:
    def __init__(self, registry: JobRegistry, adapter: SecurityToolAdapter, settings: Settings):
        self.registry = registry
        self.adapter = adapter
        self.settings = settings
        self.tasks: Set[asyncio.Task] = set()

    def submit_batch(self, options: ScanOptions, targets: List[ScanTarget]) -> List[Job]:
        jobs = []
        for target in targets:
            job, cancel_event = self.registry.create(target)
            task = asyncio.create_task(self._run_job(job.id, target, options, cancel_event))
            self.tasks.add(task)
            task.add_done_callback(self.tasks.discard)
            jobs.append(job)
        logging.info(f"Submitted batch of {len(jobs)} scan jobs. level={options.level} risk={options.risk} "
                     f"threads={options.threads} time_based={options.time_based}")
        return jobs

    async def _run_job(self, job_id, target, options, cancel_event):
        try:
            outcome = await scan_engine.run_job(
                job_id, target, options, cancel_event, self.adapter, self.settings
            )
        except asyncio.CancelledError:
            self.registry.complete(job_id, JobOutcome(status=JobStatus.CANCELLED))
            raise
        except Exception as e:
            logging.exception(f"[job_id={job_id}] Scan job failed: {e}")
            outcome = JobOutcome(status=JobStatus.DONE)
        self.registry.complete(job_id, outcome)

    async def shutdown(self):
        tasks = list(self.tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logging.info(f"Stopped {len(tasks)} running scan jobs.")
