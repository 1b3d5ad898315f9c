"""
Auth API endpoints.

register, login and forgot-password are public. Everything else requires
a valid bearer token.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.middleware.auth import require_authenticated
from shared.models import AuthContext
from shared.responses import ApiResponse

from .interfaces import IAuthService
from .models import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UpdateProfileRequest,
    UserProfile,
)

router = APIRouter()


@router.post("/register", response_model=ApiResponse[RegisterResponse], status_code=201)
async def register(
    request: RegisterRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> ApiResponse[RegisterResponse]:
    """
    Register a new account.

    Creates the identity and a resident user record. A token is only
    included in development mode with the token bypass enabled.
    """
    result = await auth.register(request)
    return ApiResponse(message="User registered successfully", data=result)


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    request: LoginRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> ApiResponse[LoginResponse]:
    result = await auth.login(request)
    return ApiResponse(message="Login successful", data=result)


@router.post("/forgot-password", response_model=ApiResponse[None])
async def forgot_password(
    request: ForgotPasswordRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> ApiResponse[None]:
    """Always reports success so the endpoint cannot be used to find accounts."""
    await auth.request_password_reset(str(request.email))
    return ApiResponse(message="If an account exists for this email, a reset link has been sent")


@router.get("/me", response_model=ApiResponse[UserProfile])
async def get_me(
    context: AuthContext = Depends(require_authenticated),
    auth: IAuthService = Depends(get_auth_service),
) -> ApiResponse[UserProfile]:
    """Get the current user's merged profile."""
    profile = await auth.get_profile(context)
    return ApiResponse(message="User profile retrieved successfully", data=profile)


@router.put("/me", response_model=ApiResponse[UserProfile])
async def update_me(
    request: UpdateProfileRequest,
    context: AuthContext = Depends(require_authenticated),
    auth: IAuthService = Depends(get_auth_service),
) -> ApiResponse[UserProfile]:
    """
    Update the current user's profile.

    Only non-privileged fields are accepted; a role in the body is ignored.
    """
    profile = await auth.update_profile(context, request)
    return ApiResponse(message="User profile updated successfully", data=profile)


@router.post("/change-password", response_model=ApiResponse[None])
async def change_password(
    request: ChangePasswordRequest,
    context: AuthContext = Depends(require_authenticated),
    auth: IAuthService = Depends(get_auth_service),
) -> ApiResponse[None]:
    await auth.change_password(context, request)
    return ApiResponse(message="Password changed successfully")
