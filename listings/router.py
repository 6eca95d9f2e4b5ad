from fastapi import APIRouter, Request, Depends, Header
from fastapi.responses import JSONResponse
from sqlalchemy import orm
from typing import Optional
import logging

from config.database import get_db
from shared_utils.auth import resolve_user_id
from shared_utils.storage_client import StorageClient, get_storage_client
from .errors import ListingError
from .forms import parse_listing_form
from .schema import ListingFailed
from .service import ListingOrchestrator

router = APIRouter()
logger = logging.getLogger(__name__)


def failure_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=400, content=ListingFailed(error=message).model_dump())


@router.post("/submit-futsal-listing")
async def submit_futsal_listing(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: orm.Session = Depends(get_db),
    storage: StorageClient = Depends(get_storage_client),
):
    """
    Create a futsal listing from one multipart form.
    200 -> {success, business_id, resource_id, service_id}; any failure -> 400 {success: false, error}.
    """
    try:
        user_id = resolve_user_id(authorization)
        form = await request.form()
        try:
            submission = await parse_listing_form(form)
        finally:
            await form.close()

        orchestrator = ListingOrchestrator(db, storage)
        created = await orchestrator.create_listing(user_id, submission)
        return created.model_dump()

    except ListingError as e:
        logger.error(
            f"Error processing futsal listing ({e.kind}): {e}",
            extra={"extra_data": {"step": e.step, "kind": e.kind}}
        )
        return failure_response(str(e))
    except Exception as e:
        logger.exception("Unexpected error processing futsal listing")
        return failure_response(str(e) or "Unknown error occurred")
