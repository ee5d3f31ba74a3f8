"""Owner credential check route."""

from fastapi import APIRouter, Depends

from api.v1.dependencies import get_credential_service
from api.v1.schemas.common import ErrorResponse
from api.v1.schemas.auth import LoginDetailResponse, LoginRequest, LoginResponse
from domain.services.credential_service import CredentialService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginDetailResponse,
    summary="Verify owner credentials",
    responses={
        200: {"description": "Credentials are valid"},
        401: {"model": ErrorResponse, "description": "Invalid username or password"},
    },
)
async def login(
    body: LoginRequest,
    service: CredentialService = Depends(get_credential_service),
) -> LoginDetailResponse:
    """Check a username/password pair. No session or token is created."""
    user = await service.verify(body.username, body.password)
    return LoginDetailResponse(data=LoginResponse(username=user.username))
