# src/api/routes.py
from fastapi import APIRouter, Depends, HTTPException, Request
from api.schemas import ErrorResponse, ScanBatchRequest, ScanResult, ScanStatus
from engine.job_registry import JobRegistry
from engine.scan_service import ScanService
from typing import List

router = APIRouter()
SCAN_PREFIX = "/acm/v1/sqlmap"


def get_registry(request: Request) -> JobRegistry:
    return request.app.state.registry


def get_scan_service(request: Request) -> ScanService:
    return request.app.state.scan_service


@router.get("/ping")
async def ping():
    return {"message": "pong"}


@router.get("/health")
async def health_check():
    return {"status": "ok"}


@router.post(
    SCAN_PREFIX,
    summary="Submit a batch of sqlmap scans (async)",
    response_description="Initial state of every created job",
    tags=["Scan Jobs"],
    status_code=202,
    response_model=List[ScanResult],
    responses={
        202: {"description": "Jobs accepted and running"},
        400: {"model": ErrorResponse, "description": "Malformed batch"},
    },
)
async def submit_scan_batch(batch: ScanBatchRequest, scan_service: ScanService = Depends(get_scan_service)):
    """
    Create one job per entry in `url` and start them all. Does not wait for any scan.
    """
    options = batch.to_options()
    jobs = scan_service.submit_batch(options, [entry.to_target() for entry in batch.url])
    return [job.to_dict() for job in jobs]


@router.get(
    SCAN_PREFIX + "/{job_id}/status",
    summary="Get scan job status",
    tags=["Scan Jobs"],
    response_model=ScanStatus,
    responses={404: {"model": ErrorResponse, "description": "Job not found"}},
)
async def get_scan_status(job_id: str, registry: JobRegistry = Depends(get_registry)):
    job = registry.get(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Scan ID not found")
    return {"status": job.status.value}


@router.get(
    SCAN_PREFIX + "/{job_id}/result",
    summary="Get scan job result",
    response_description="Status only while running, full result once finished",
    tags=["Scan Jobs"],
    response_model=dict,
    responses={404: {"model": ErrorResponse, "description": "Job not found"}},
)
async def get_scan_result(job_id: str, registry: JobRegistry = Depends(get_registry)):
    job = registry.get(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Scan ID not found")
    if not job.status.is_terminal:
        return {"status": job.status.value}
    return job.to_dict()


@router.get(
    SCAN_PREFIX,
    summary="List all scan jobs",
    tags=["Scan Jobs"],
    response_model=List[ScanResult],
)
async def list_scans(registry: JobRegistry = Depends(get_registry)):
    return [job.to_dict() for job in registry.list()]


@router.delete(
    SCAN_PREFIX + "/{job_id}",
    summary="Cancel a running scan job",
    tags=["Scan Jobs"],
    response_model=ScanStatus,
    responses={404: {"model": ErrorResponse, "description": "Job not found or already finished"}},
)
async def cancel_scan(job_id: str, registry: JobRegistry = Depends(get_registry)):
    if not registry.cancel(job_id):
        raise HTTPException(status_code=404, detail="Scan ID not found or already finished")
    return {"status": "cancelled"}
