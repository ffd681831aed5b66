"""
Principals as seen by the application layer.

Admins and users live in separate collections; here they are a tagged union
keyed on ``principal_type`` so callers never guess which store a record
came from. The ``admin`` role of an admin principal is derived, not stored.
"""
from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel

PrincipalType = Literal["admin", "user"]


class AdminPrincipal(BaseModel):
    principal_type: Literal["admin"] = "admin"
    id: str
    name: str
    email: str
    avatar: Optional[str] = None

    @property
    def role(self) -> str:
        return "admin"


class UserPrincipal(BaseModel):
    principal_type: Literal["user"] = "user"
    id: str
    name: str
    email: str
    role: str = "user"
    phone: Optional[str] = None
    avatar: Optional[str] = None


class SessionContext(BaseModel):
    """Who is calling, as recovered from a verified bearer token"""
    principal_id: str
    principal_type: PrincipalType


def admin_principal_from_doc(doc: Dict[str, Any]) -> AdminPrincipal:
    return AdminPrincipal(
        id=str(doc["_id"]),
        name=doc.get("name", ""),
        email=doc["email"],
        avatar=doc.get("avatar"),
    )


def user_principal_from_doc(doc: Dict[str, Any]) -> UserPrincipal:
    return UserPrincipal(
        id=str(doc["_id"]),
        name=doc.get("name", ""),
        email=doc["email"],
        role=doc.get("role", "user"),
        phone=doc.get("phone"),
        avatar=doc.get("avatar"),
    )
