from scripts.create_admin import create_or_update_admin
from urbannest.core.security import verify_password


def test_create_then_update_admin(admin_repo, auth_service):
    created = create_or_update_admin(admin_repo, "Site Admin", "Admin@X.com", "firstpass")
    assert created["email"] == "admin@x.com"
    assert auth_service.authenticate("admin@x.com", "firstpass").principal_type == "admin"

    admin_repo.update(str(created["_id"]), {"is_active": False})
    create_or_update_admin(admin_repo, "Site Admin", "admin@x.com", "secondpass")

    stored = admin_repo.find_by_email("admin@x.com", include_password=True)
    assert stored["is_active"] is True
    assert verify_password("secondpass", stored["password_hash"])
    assert admin_repo.collection.count_documents({}) == 1
