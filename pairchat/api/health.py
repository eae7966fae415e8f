# pairchat/api/health.py

from fastapi import APIRouter

from pairchat.infrastructure import schemas

router = APIRouter()


@router.get("/health", response_model=schemas.HealthResponse)
async def health():
    return schemas.HealthResponse(status="ok")
