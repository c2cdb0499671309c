"""API routes. Everything under the API prefix is rate limited per role."""

from fastapi import APIRouter, Depends

from acquisitions.api import auth, health, users
from acquisitions.api.deps import enforce_rate_limit
from acquisitions.schemas.health import ApiInfoResponse

router = APIRouter(dependencies=[Depends(enforce_rate_limit)])
router.add_api_route("", health.get_api_info, methods=["GET"], response_model=ApiInfoResponse)
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])

health_router = health.router

__all__ = ["health_router", "router"]
