from fastapi import APIRouter, Depends, status

from urbannest.core.dependencies import get_auth_service, require_roles
from urbannest.core.exceptions import NotFoundException, ResponseBody
from urbannest.schemas.admin_schema import UserStatusRequest
from urbannest.services.auth_service import AuthService

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_roles("admin"))],
)


@router.patch(
    "/users/{user_id}/status",
    response_model=ResponseBody,
    status_code=status.HTTP_200_OK,
    summary="Activate or deactivate a user (Admin Only)",
    description="Deactivated users are refused at login",
)
def update_user_status(
    user_id: str,
    status_data: UserStatusRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    user = auth_service.set_user_active(user_id, status_data.is_active)
    if user is None:
        raise NotFoundException("User not found")
    return ResponseBody(
        message="User status updated",
        data={"id": user.id, "is_active": status_data.is_active},
    )
