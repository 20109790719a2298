"""Tests for authentication endpoints."""
from adcert.models.audit_log import AuditLog
from adcert.models.user import User


class TestLogin:
    """Test /auth/login endpoint."""

    def test_login_success(self, client, advertiser_user):
        """Test successful login returns token."""
        response = client.post(
            "/auth/login",
            json={"email": "advertiser@example.com", "password": "testpass123"}
        )
        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert data["token_type"] == "bearer"

    def test_login_wrong_password(self, client, advertiser_user):
        response = client.post(
            "/auth/login",
            json={"email": "advertiser@example.com", "password": "wrongpass"}
        )
        assert response.status_code == 401
        assert "Incorrect email or password" in response.json()["detail"]

    def test_login_nonexistent_user(self, client):
        response = client.post(
            "/auth/login",
            json={"email": "nobody@example.com", "password": "anypass"}
        )
        assert response.status_code == 401

    def test_login_invalid_email_format(self, client):
        response = client.post(
            "/auth/login",
            json={"email": "not-an-email", "password": "anypass"}
        )
        assert response.status_code == 422

    def test_token_from_login_authenticates(self, client, reviewer_user):
        """The issued token resolves back to the same user."""
        token = client.post(
            "/auth/login",
            json={"email": "reviewer@example.com", "password": "testpass123"}
        ).json()["access_token"]
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["role"] == "reviewer"


class TestRegister:
    """Test /auth/register endpoint."""

    def test_register_creates_advertiser(self, client, db_session):
        response = client.post(
            "/auth/register",
            json={
                "email": "newbrand@example.com",
                "full_name": "New Brand",
                "company_name": "New Brand Ltd",
                "password": "longenough1",
            }
        )
        assert response.status_code == 201
        data = response.json()
        assert data["role"] == "advertiser"
        assert data["is_verified"] is False
        assert data["capabilities"]["can_submit"] is True

        log = db_session.query(AuditLog).filter(
            AuditLog.entity_type == "User", AuditLog.action == "CREATE"
        ).first()
        assert log is not None
        assert log.changes["self_registered"] is True

    def test_register_ignores_role_field(self, client, db_session):
        """Self sign-up can never produce staff accounts."""
        response = client.post(
            "/auth/register",
            json={
                "email": "sneaky@example.com",
                "full_name": "Sneaky",
                "password": "longenough1",
                "role": "admin",
            }
        )
        assert response.status_code == 201
        assert response.json()["role"] == "advertiser"

    def test_register_duplicate_email(self, client, advertiser_user):
        response = client.post(
            "/auth/register",
            json={
                "email": "advertiser@example.com",
                "full_name": "Again",
                "password": "longenough1",
            }
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Email already registered"

    def test_register_short_password(self, client):
        response = client.post(
            "/auth/register",
            json={"email": "short@example.com", "full_name": "Short", "password": "abc"}
        )
        assert response.status_code == 422


class TestGetMe:
    """Test /auth/me endpoint."""

    def test_get_me_advertiser_capabilities(self, client, advertiser_user, advertiser_headers):
        response = client.get("/auth/me", headers=advertiser_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "advertiser@example.com"
        assert data["role"] == "advertiser"
        assert data["capabilities"]["can_submit"] is True
        assert data["capabilities"]["can_review_submissions"] is False
        assert data["capabilities"]["can_view_audit_logs"] is False

    def test_get_me_admin_capabilities(self, client, admin_user, admin_headers):
        response = client.get("/auth/me", headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "admin"
        assert data["role_display"] == "Administrator"
        assert data["capabilities"]["can_review_submissions"] is True
        assert data["capabilities"]["can_revoke_certificates"] is True
        assert data["capabilities"]["can_manage_users"] is True

    def test_get_me_unauthenticated(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401

    def test_get_me_invalid_token(self, client):
        response = client.get(
            "/auth/me",
            headers={"Authorization": "Bearer invalid-token"}
        )
        assert response.status_code == 401

    def test_update_me_changes_profile_and_password(self, client, db_session, advertiser_user, advertiser_headers):
        response = client.patch(
            "/auth/me",
            headers=advertiser_headers,
            json={"phone": "+2348000000000", "password": "brandnewpass"}
        )
        assert response.status_code == 200
        assert response.json()["phone"] == "+2348000000000"

        login = client.post(
            "/auth/login",
            json={"email": "advertiser@example.com", "password": "brandnewpass"}
        )
        assert login.status_code == 200

        log = db_session.query(AuditLog).filter(AuditLog.action == "UPDATE").first()
        assert log.changes["password"] == "changed"

    def test_update_me_null_full_name_rejected(self, client, db_session, advertiser_user, advertiser_headers):
        """An explicit null for a required profile field is a validation error, not a crash."""
        response = client.patch("/auth/me", headers=advertiser_headers, json={"full_name": None})
        assert response.status_code == 422

        db_session.refresh(advertiser_user)
        assert advertiser_user.full_name == "Ada Okafor"

    def test_update_me_null_optional_field_clears_it(self, client, advertiser_headers):
        response = client.patch("/auth/me", headers=advertiser_headers, json={"company_name": None})
        assert response.status_code == 200
        assert response.json()["company_name"] is None
        assert response.json()["full_name"] == "Ada Okafor"


class TestUserAdministration:
    """Test /auth/users endpoints."""

    def test_admin_creates_reviewer(self, client, db_session, admin_headers):
        response = client.post(
            "/auth/users",
            headers=admin_headers,
            json={
                "email": "newreviewer@example.com",
                "full_name": "New Reviewer",
                "password": "reviewerpass",
                "role": "reviewer",
                "is_verified": True,
            }
        )
        assert response.status_code == 201
        assert response.json()["role"] == "reviewer"
        user = db_session.query(User).filter(User.email == "newreviewer@example.com").first()
        assert user is not None

    def test_reviewer_cannot_create_users(self, client, reviewer_headers):
        response = client.post(
            "/auth/users",
            headers=reviewer_headers,
            json={
                "email": "x@example.com",
                "full_name": "X",
                "password": "whatever12",
                "role": "admin",
            }
        )
        assert response.status_code == 403

    def test_admin_lists_users(self, client, admin_headers, advertiser_user, reviewer_user):
        response = client.get("/auth/users", headers=admin_headers)
        assert response.status_code == 200
        emails = {u["email"] for u in response.json()}
        assert {"admin@example.com", "advertiser@example.com", "reviewer@example.com"} <= emails
