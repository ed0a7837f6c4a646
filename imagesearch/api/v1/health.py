from fastapi import APIRouter

router = APIRouter()


@router.get(
    "/health",
    summary="Liveness check",
    description="Returns HTTP 200 while the application process is running.",
)
async def liveness():
    return {"status": "healthy"}
