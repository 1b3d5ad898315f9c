"""
Health and API information endpoints.

/health is for load balancers and needs no token. /api describes the
running service. /api/env is admin-only and never returns secrets.
"""

from fastapi import APIRouter, Depends

from shared.config import Settings
from shared.models import AuthContext, CamelModel
from shared.responses import ApiResponse, utc_timestamp

from ..dependencies import get_settings_dependency
from ..middleware.auth import require_admin, require_authenticated

router = APIRouter()


class HealthResponse(CamelModel):
    """Health check response model."""

    status: str
    version: str


class ApiInfo(CamelModel):
    """Public description of the running API."""

    name: str
    version: str
    environment: str
    time: str
    backend: str
    supabase_configured: bool


class EnvironmentInfo(CamelModel):
    """Non-sensitive runtime configuration, for admins."""

    environment: str
    port: int
    cors_origins: list[str]
    max_upload_bytes: int
    uploads_folder: str
    backend: str
    dev_token_bypass: bool


@router.get("/health", response_model=ApiResponse[HealthResponse])
async def health_check(settings: Settings = Depends(get_settings_dependency)) -> ApiResponse[HealthResponse]:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return ApiResponse(
        message="OK",
        data=HealthResponse(status="healthy", version=settings.app_version),
    )


@router.get("/api", response_model=ApiResponse[ApiInfo])
async def api_info(settings: Settings = Depends(get_settings_dependency)) -> ApiResponse[ApiInfo]:
    info = ApiInfo(
        name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        time=utc_timestamp(),
        backend=settings.backend,
        supabase_configured=bool(settings.supabase_url and settings.supabase_service_role_key),
    )
    return ApiResponse(message="API information", data=info)


@router.get(
    "/api/env",
    response_model=ApiResponse[EnvironmentInfo],
    dependencies=[Depends(require_authenticated)],
)
async def environment_info(
    _: AuthContext = Depends(require_admin),
    settings: Settings = Depends(get_settings_dependency),
) -> ApiResponse[EnvironmentInfo]:
    info = EnvironmentInfo(
        environment=settings.environment,
        port=settings.port,
        cors_origins=settings.cors_origins,
        max_upload_bytes=settings.max_upload_bytes,
        uploads_folder=settings.uploads_folder,
        backend=settings.backend,
        dev_token_bypass=settings.dev_bypass_active,
    )
    return ApiResponse(message="Environment information", data=info)
