from typing import Union

from fastapi import APIRouter, Depends, status
from urbannest.schemas.auth_schema import (
    RegisterRequest,
    LoginRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    PrincipalResponse,
    AuthResponse,
)
from urbannest.services.auth_service import AuthService
from urbannest.services.password_reset_service import PasswordResetService
from urbannest.core.dependencies import (
    get_auth_service,
    get_current_principal,
    get_password_reset_service,
)
from urbannest.core.jwt_handler import create_access_token
from urbannest.core.exceptions import (
    AccountDeactivatedError,
    AccountNotFoundError,
    DeliveryError,
    InputValidationError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    InternalServerErrorException,
    ResponseBody,
)
from urbannest.models.principal_model import AdminPrincipal, UserPrincipal

router = APIRouter(prefix="/auth", tags=["auth"])


def _principal_response(principal: Union[AdminPrincipal, UserPrincipal]) -> PrincipalResponse:
    return PrincipalResponse(
        id=principal.id,
        name=principal.name,
        email=principal.email,
        role=principal.role,
        phone=getattr(principal, "phone", None),
        avatar=principal.avatar,
    )


def _auth_response(principal: Union[AdminPrincipal, UserPrincipal]) -> AuthResponse:
    token = create_access_token(principal.id, principal.principal_type)
    return AuthResponse(token=token, user=_principal_response(principal))


@router.post(
    "/register",
    response_model=ResponseBody,
    status_code=status.HTTP_201_CREATED,
    summary="User Registration",
    description="Register a new user or agent with name, email and password",
)
def register(
    register_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user.

    Raises:
        HTTPException 400: Missing fields, email already registered or admin role requested
    """
    try:
        user = auth_service.register(
            name=register_data.name,
            email=register_data.email,
            password=register_data.password,
            role=register_data.role,
            phone=register_data.phone,
        )

        return ResponseBody(
            message="User registered successfully",
            data=_auth_response(user),
        )
    except InputValidationError as e:
        raise BadRequestException(message=e.message)
    except Exception as e:
        raise InternalServerErrorException(message=f"Registration failed: {e}")


@router.post(
    "/login",
    response_model=ResponseBody,
    status_code=status.HTTP_200_OK,
    summary="Login",
    description="Authenticate an admin or user with email and password",
)
def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Authenticate by email. Admin accounts take precedence over user accounts.

    Raises:
        HTTPException 400: If email or password is missing
        HTTPException 401: Invalid credentials or deactivated account
    """
    try:
        principal = auth_service.authenticate(
            email=login_data.email, password=login_data.password
        )

        return ResponseBody(
            message="Login successful",
            data=_auth_response(principal),
        )
    except InputValidationError as e:
        raise BadRequestException(message=e.message)
    except (InvalidCredentialsError, AccountDeactivatedError) as e:
        raise UnauthorizedException(message=e.message)
    except Exception as e:
        raise InternalServerErrorException(message=f"Login failed: {e}")


@router.get(
    "/me",
    response_model=ResponseBody,
    status_code=status.HTTP_200_OK,
    summary="Current Principal",
    description="Return the admin or user the bearer token belongs to",
)
def me(principal: Union[AdminPrincipal, UserPrincipal] = Depends(get_current_principal)):
    return ResponseBody(
        message="Current user",
        data=_principal_response(principal),
    )


@router.post(
    "/forgot-password",
    response_model=ResponseBody,
    status_code=status.HTTP_200_OK,
    summary="Forgot Password",
    description="Email a single-use password reset link",
)
def forgot_password(
    forgot_data: ForgotPasswordRequest,
    reset_service: PasswordResetService = Depends(get_password_reset_service)
):
    """
    Start a password reset.

    Raises:
        HTTPException 400: If email is missing
        HTTPException 404: If no account uses that email
        HTTPException 500: If the email could not be sent
    """
    try:
        reset_service.request_reset(forgot_data.email)
        return ResponseBody(message="Password reset email sent")
    except InputValidationError as e:
        raise BadRequestException(message=e.message)
    except AccountNotFoundError as e:
        raise NotFoundException(message=e.message)
    except DeliveryError as e:
        raise InternalServerErrorException(message=str(e), public_message=e.message)
    except Exception as e:
        raise InternalServerErrorException(message=f"Forgot password failed: {e}")


@router.post(
    "/reset-password/{token}",
    response_model=ResponseBody,
    status_code=status.HTTP_200_OK,
    summary="Reset Password",
    description="Set a new password using the token from the reset email",
)
def reset_password(
    token: str,
    reset_data: ResetPasswordRequest,
    reset_service: PasswordResetService = Depends(get_password_reset_service)
):
    """
    Finish a password reset.

    Raises:
        HTTPException 400: Missing/short password, or invalid or expired token
    """
    try:
        reset_service.reset_password(token, reset_data.password)
        return ResponseBody(message="Password reset successful")
    except (InputValidationError, InvalidOrExpiredTokenError) as e:
        raise BadRequestException(message=e.message)
    except Exception as e:
        raise InternalServerErrorException(message=f"Reset password failed: {e}")
