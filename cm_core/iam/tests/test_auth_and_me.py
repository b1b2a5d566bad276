# cm_core/iam/tests/test_auth_and_me.py
import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from cm_core.iam.models import StaffRole

pytestmark = pytest.mark.django_db


def test_me_requires_auth():
    """
    Fresh client: the api_client fixture is already authenticated.
    """
    c = APIClient()
    res = c.get("/api/v1/me/")
    assert res.status_code == 401
    assert res.data["error"]["code"] == "not_authenticated"


def test_login_returns_tokens_and_sets_cookies(make_staff, settings):
    staff = make_staff(StaffRole.DOCTOR, email="doc@clinic.test", password="Doc@123456")

    c = APIClient()
    res = c.post("/api/v1/auth/login/", {"email": "doc@clinic.test", "password": "Doc@123456"}, format="json")
    assert res.status_code == 200, res.data

    assert res.data["user"]["id"] == staff.user_id
    assert res.data["user"]["role"] == "doctor"
    assert "password" not in res.data["user"]
    assert res.data["access"]
    assert res.data["refresh"]

    assert settings.SIMPLE_JWT["AUTH_COOKIE"] in res.cookies
    assert settings.SIMPLE_JWT["AUTH_COOKIE_REFRESH"] in res.cookies


def test_login_bad_password_is_401_envelope(make_staff):
    make_staff(StaffRole.DOCTOR, email="doc@clinic.test", password="Doc@123456")

    res = APIClient().post("/api/v1/auth/login/", {"email": "doc@clinic.test", "password": "wrong-pass"}, format="json")
    assert res.status_code == 401
    assert res.data["error"]["code"] == "authentication_failed"
    assert res.data["error"]["request_id"]


def test_bearer_token_authenticates_me(make_staff):
    staff = make_staff(StaffRole.PHARMACIST)

    c = APIClient()
    access = str(RefreshToken.for_user(staff.user).access_token)
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

    res = c.get("/api/v1/me/")
    assert res.status_code == 200
    assert res.data["id"] == staff.user_id
    assert res.data["role"] == "pharmacist"


def test_cookie_token_authenticates_me(make_staff, settings):
    staff = make_staff(StaffRole.NURSE)

    c = APIClient()
    c.cookies[settings.SIMPLE_JWT["AUTH_COOKIE"]] = str(RefreshToken.for_user(staff.user).access_token)

    res = c.get("/api/v1/me/")
    assert res.status_code == 200
    assert res.data["full_name"] == staff.full_name


def test_refresh_from_body(make_staff):
    staff = make_staff(StaffRole.CASHIER)
    refresh = RefreshToken.for_user(staff.user)

    res = APIClient().post("/api/v1/auth/refresh/", {"refresh": str(refresh)}, format="json")
    assert res.status_code == 200, res.data
    assert res.data["access"]


def test_refresh_without_token_is_401():
    res = APIClient().post("/api/v1/auth/refresh/", {}, format="json")
    assert res.status_code == 401


def test_logout_clears_cookies(api_client, settings):
    res = api_client.post("/api/v1/auth/logout/")
    assert res.status_code == 200
    assert res.cookies[settings.SIMPLE_JWT["AUTH_COOKIE"]].value == ""


def test_admin_creates_user(api_client):
    res = api_client.post(
        "/api/v1/users/",
        {"email": "new@clinic.test", "password": "Secret@123", "full_name": "New Hire", "role": "cashier"},
        format="json",
    )
    assert res.status_code == 201, res.data
    assert res.data["email"] == "new@clinic.test"
    assert res.data["role"] == "cashier"

    listed = api_client.get("/api/v1/users/?role=cashier")
    assert listed.status_code == 200
    assert [u["email"] for u in listed.data] == ["new@clinic.test"]


def test_create_user_short_password_rejected(api_client):
    res = api_client.post(
        "/api/v1/users/",
        {"email": "new@clinic.test", "password": "short", "full_name": "New Hire", "role": "nurse"},
        format="json",
    )
    assert res.status_code == 400
    assert res.data["error"]["code"] == "validation_error"
    assert "password" in res.data["error"]["details"]


def test_create_user_duplicate_email_400(api_client, make_staff):
    make_staff(StaffRole.NURSE, email="taken@clinic.test")
    res = api_client.post(
        "/api/v1/users/",
        {"email": "taken@clinic.test", "password": "Secret@123", "full_name": "Dup", "role": "nurse"},
        format="json",
    )
    assert res.status_code == 400
    assert "email" in res.data["error"]["details"]


def test_non_admin_cannot_create_user(client_for, doctor):
    res = client_for(doctor).post(
        "/api/v1/users/",
        {"email": "x@clinic.test", "password": "Secret@123", "full_name": "X", "role": "admin"},
        format="json",
    )
    assert res.status_code == 403
    assert res.data["error"]["code"] == "permission_denied"
