# src/engine/job_registry.py
"""
JobRegistry: in-memory store of scan jobs and their cancellation events.

Every operation runs as a single critical section under one lock. Job records
are immutable snapshots that are swapped on each transition, so a reader never
sees a half-written job. A cancellation event is installed for a job exactly
while it is running; whoever removes it (the job's own completion or a cancel
call) owns the terminal write.
"""

import asyncio
import dataclasses
import logging
import threading
import uuid
from typing import Dict, List, Optional, Tuple

from engine.models import Job, JobOutcome, JobStatus, ScanTarget


class JobRegistry:
    def __init__(self):
        self.jobs: Dict[str, Job] = {}
        self.cancel_events: Dict[str, asyncio.Event] = {}
        self.lock = threading.Lock()

    def create(self, target: ScanTarget) -> Tuple[Job, asyncio.Event]:
        job_id = str(uuid.uuid4())
        job = Job(id=job_id, url=target.url, target=target)
        cancel_event = asyncio.Event()
        with self.lock:
            self.jobs[job_id] = job
            self.cancel_events[job_id] = cancel_event
        logging.info(f"[job_id={job_id}] Created scan job. url={target.url}")
        return job, cancel_event

    def get(self, job_id: str) -> Optional[Job]:
        with self.lock:
            return self.jobs.get(job_id)

    def complete(self, job_id: str, outcome: JobOutcome) -> bool:
        """
        Record the runner's terminal outcome. Returns False without touching the
        job when it is unknown or already terminal (e.g. cancelled meanwhile).
        """
        if not outcome.status.is_terminal:
            raise ValueError(f"cannot complete job with non-terminal status {outcome.status.value}")
        with self.lock:
            if self.cancel_events.pop(job_id, None) is None:
                current = self.jobs.get(job_id)
                state = current.status.value if current else "unknown"
                logging.info(f"[job_id={job_id}] Ignoring {outcome.status.value} outcome, job is {state}.")
                return False
            self.jobs[job_id] = dataclasses.replace(
                self.jobs[job_id],
                status=outcome.status,
                vulnerable=outcome.vulnerable,
                payload=outcome.payload,
            )
        logging.info(
            f"[job_id={job_id}] Finished scan job. status={outcome.status.value} vulnerable={outcome.vulnerable}"
        )
        return True

    def cancel(self, job_id: str) -> bool:
        with self.lock:
            cancel_event = self.cancel_events.pop(job_id, None)
            if cancel_event is None:
                return False
            cancel_event.set()
            self.jobs[job_id] = dataclasses.replace(
                self.jobs[job_id], status=JobStatus.CANCELLED, vulnerable=False, payload=""
            )
        logging.info(f"[job_id={job_id}] Cancelled scan job.")
        return True

    def list(self) -> List[Job]:
        with self.lock:
            return list(self.jobs.values())

    def __len__(self):
        with self.lock:
            return len(self.jobs)
