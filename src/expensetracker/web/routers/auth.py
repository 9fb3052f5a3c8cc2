from uuid import UUID

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from expensetracker.web.deps import AppDep
from expensetracker.web.openapi import ErrorResponse

router = APIRouter(prefix="/auth", tags=["auth"])


class RegisterRequest(BaseModel):
    """Account registration request."""

    username: str = Field(..., min_length=1, description="Unique, case-sensitive username")
    password: str = Field(..., min_length=1, description="Password for the new account")


class RegisterResponse(BaseModel):
    user_id: UUID = Field(..., alias="userId", description="ID of the created user")

    model_config = ConfigDict(populate_by_name=True)


class LoginRequest(BaseModel):
    """Authentication request."""

    username: str = Field(..., min_length=1, description="Username for authentication")
    password: str = Field(..., min_length=1, description="Password for authentication")


class LoginResponse(BaseModel):
    """Authentication response."""

    token: str = Field(..., description="Bearer token for subsequent requests")


@router.post(
    "/register",
    summary="Register account",
    description="Create a new user account with a unique username.",
    operation_id="register",
    status_code=201,
    responses={
        201: {"description": "Account created"},
        400: {"model": ErrorResponse, "description": "Missing fields or username already taken"},
    },
)
async def register(request: RegisterRequest, app: AppDep) -> RegisterResponse:
    user = await app.register(request.username, request.password)
    return RegisterResponse(user_id=user.id)


@router.post(
    "/login",
    summary="Authenticate user",
    description="Authenticate with username and password to receive a time-limited bearer token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Missing fields"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        404: {"model": ErrorResponse, "description": "Unknown user"},
    },
)
async def login(request: LoginRequest, app: AppDep) -> LoginResponse:
    token = await app.login(request.username, request.password)
    return LoginResponse(token=token)
