from fastapi import APIRouter

from imagesearch.api.v1 import images

api_router = APIRouter(prefix="/v1")

api_router.include_router(images.router, prefix="/images", tags=["Images"])
