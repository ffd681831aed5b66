import pytest

from urbannest.core.exceptions import (
    AccountDeactivatedError,
    InputValidationError,
    InvalidCredentialsError,
)
from urbannest.models.principal_model import AdminPrincipal, SessionContext, UserPrincipal


def test_register_creates_user_with_hashed_password(auth_service, user_repo):
    user = auth_service.register("Bob", "Bob@X.com", "secret1", phone="5551234")
    assert isinstance(user, UserPrincipal)
    assert user.email == "bob@x.com"
    assert user.role == "user"
    assert user.phone == "5551234"

    stored = user_repo.find_by_email("bob@x.com", include_password=True)
    assert stored["password_hash"] != "secret1"
    assert stored["is_active"] is True


def test_register_accepts_agent_role(auth_service):
    assert auth_service.register("Ann", "ann@x.com", "secret1", role="agent").role == "agent"


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"name": "", "email": "a@x.com", "password": "secret1"}, "provide name"),
        ({"name": "A", "email": None, "password": "secret1"}, "provide name"),
        ({"name": "A", "email": "a@x.com", "password": ""}, "provide name"),
        ({"name": "A", "email": "a@x.com", "password": "secret1", "role": "admin"}, "Admin accounts"),
        ({"name": "A", "email": "a@x.com", "password": "secret1", "role": "owner"}, "not allowed"),
        ({"name": "A", "email": "a@x.com", "password": "12345"}, "at least 6"),
        ({"name": "A", "email": "not-an-email", "password": "secret1"}, "valid email"),
    ],
)
def test_register_rejects_bad_input(auth_service, kwargs, message):
    with pytest.raises(InputValidationError, match=message):
        auth_service.register(**kwargs)


def test_register_rejects_existing_email(auth_service):
    auth_service.register("Bob", "bob@x.com", "secret1")
    with pytest.raises(InputValidationError, match="already exists"):
        auth_service.register("Bobby", "BOB@x.com", "secret2")


def test_login_missing_fields(auth_service):
    with pytest.raises(InputValidationError):
        auth_service.authenticate("", "secret1")
    with pytest.raises(InputValidationError):
        auth_service.authenticate("bob@x.com", None)


def test_login_user(auth_service):
    auth_service.register("Bob", "bob@x.com", "secret1", role="agent")
    principal = auth_service.authenticate("bob@x.com", "secret1")
    assert isinstance(principal, UserPrincipal)
    assert principal.role == "agent"


def test_login_admin_precedence_over_user_with_same_email(auth_service, make_admin):
    make_admin(email="shared@x.com", password="adminpass")
    auth_service.register("Shadow", "shared@x.com", "userpass")

    principal = auth_service.authenticate("shared@x.com", "adminpass")
    assert isinstance(principal, AdminPrincipal)
    assert principal.role == "admin"

    with pytest.raises(InvalidCredentialsError):
        auth_service.authenticate("shared@x.com", "userpass")


def test_unknown_email_and_wrong_password_are_indistinguishable(auth_service):
    auth_service.register("Real", "real@x.com", "secret1")

    with pytest.raises(InvalidCredentialsError) as unknown:
        auth_service.authenticate("unknown@x.com", "anything")
    with pytest.raises(InvalidCredentialsError) as wrong:
        auth_service.authenticate("real@x.com", "wrongpassword")

    assert type(unknown.value) is type(wrong.value)
    assert unknown.value.message == wrong.value.message


def test_deactivated_user_is_refused_even_with_correct_password(auth_service):
    user = auth_service.register("Bob", "bob@x.com", "secret1")
    auth_service.set_user_active(user.id, False)

    with pytest.raises(AccountDeactivatedError):
        auth_service.authenticate("bob@x.com", "secret1")


def test_deactivated_admin_is_refused(auth_service, make_admin):
    make_admin(email="admin@x.com", password="adminpass", is_active=False)
    with pytest.raises(AccountDeactivatedError):
        auth_service.authenticate("admin@x.com", "adminpass")


def test_admin_login_records_last_login(auth_service, admin_repo, make_admin):
    make_admin(email="admin@x.com", password="adminpass")
    auth_service.authenticate("admin@x.com", "adminpass")
    assert admin_repo.find_by_email("admin@x.com")["last_login"] is not None


def test_admin_login_survives_last_login_failure(auth_service, admin_repo, make_admin, monkeypatch):
    make_admin(email="admin@x.com", password="adminpass")

    def broken_update(*args, **kwargs):
        raise RuntimeError("write failed")

    monkeypatch.setattr(admin_repo, "update", broken_update)
    principal = auth_service.authenticate("admin@x.com", "adminpass")
    assert principal.principal_type == "admin"


def test_get_principal_dispatches_on_type(auth_service, make_admin):
    admin = make_admin(email="admin@x.com")
    user = auth_service.register("Bob", "bob@x.com", "secret1")

    resolved_admin = auth_service.get_principal(
        SessionContext(principal_id=str(admin["_id"]), principal_type="admin")
    )
    assert isinstance(resolved_admin, AdminPrincipal)

    resolved_user = auth_service.get_principal(SessionContext(principal_id=user.id, principal_type="user"))
    assert isinstance(resolved_user, UserPrincipal)

    # An admin id presented as a user session is not looked up in the admin store
    assert auth_service.get_principal(
        SessionContext(principal_id=str(admin["_id"]), principal_type="user")
    ) is None


def test_set_user_active_unknown_user(auth_service):
    assert auth_service.set_user_active("65f0c0ffee0000000000abcd", False) is None


def test_register_rejects_multibyte_password_over_bcrypt_limit(auth_service, user_repo):
    with pytest.raises(InputValidationError, match="at most 72 bytes"):
        auth_service.register("Zoé", "zoe@x.com", "é" * 40)
    assert user_repo.find_by_email("zoe@x.com") is None


def test_register_accepts_multibyte_password_at_bcrypt_limit(auth_service):
    auth_service.register("Zoé", "zoe@x.com", "é" * 36)
    assert auth_service.authenticate("zoe@x.com", "é" * 36).email == "zoe@x.com"


def test_register_reports_taken_email_before_admin_role(auth_service):
    auth_service.register("Bob", "bob@x.com", "secret1")
    with pytest.raises(InputValidationError, match="already exists"):
        auth_service.register("Bob", "bob@x.com", "secret1", role="admin")
