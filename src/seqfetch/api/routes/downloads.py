"""Download submission routes."""

import logging

from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from seqfetch.api.deps import DispatcherDep
from seqfetch.schemas import parse_download_job

router = APIRouter(tags=["downloads"])
logger = logging.getLogger("seqfetch.api.downloads")


@router.post(
    "/download",
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        400: {"description": "Body is not a valid download job"},
        503: {"description": "Too many jobs in flight"},
    },
)
async def download_by_accession(request: Request, dispatcher: DispatcherDep):
    """
    Queue a record download and acknowledge it immediately.

    The response echoes the job as submitted; `filename` is only known
    once the job runs and is delivered through the callback.
    """
    body = await request.body()
    try:
        parsed = parse_download_job(body)
    except ValidationError as e:
        logger.warning(f"Rejected download job: {e.error_count()} validation error(s)")
        return Response(status_code=status.HTTP_400_BAD_REQUEST, media_type="application/json")

    if parsed.molecule_type.defaulted:
        logger.warning(
            f"Invalid molecule_type {parsed.molecule_type.original!r}, "
            f"using {parsed.molecule_type.variant.value!r} instead"
        )

    job = parsed.job
    dispatcher.submit(job.model_copy())
    logger.info(f"Accepted download of {job.accession} for {job.callback_id}")

    return JSONResponse(status_code=status.HTTP_202_ACCEPTED, content=job.to_payload())
