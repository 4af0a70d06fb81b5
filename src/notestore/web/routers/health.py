from fastapi import APIRouter

from notestore.web.openapi import StatusMessage

router: APIRouter = APIRouter(tags=["health"])


@router.get("/healthchecker", summary="Health check", operation_id="healthCheck")
async def health_checker() -> StatusMessage:
    return StatusMessage(status="success", message="Notes API is running")
