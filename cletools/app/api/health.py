from fastapi import APIRouter

from cletools.app.domain.schemas import HealthResponse

router = APIRouter()

VERSION = "0.1.0"


@router.get("/health", response_model=HealthResponse)
def health():
    """Constant-time health check."""
    return HealthResponse(status="healthy")


@router.get("/version")
async def version():
    return {"version": VERSION}
