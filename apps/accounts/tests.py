from django.conf import settings
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from apps.accounts.models import Organization, Role, User, UserStatus
from apps.accounts.services import AuthService


class SignupTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.url = "/api/auth/signup/"

    def _signup(self, email, organization="Acme"):
        return self.client.post(self.url, {
            "first_name": "Asha",
            "last_name": "Rao",
            "email": email,
            "password": "secret123",
            "organization": organization,
        }, format="json")

    def test_first_user_of_org_becomes_admin(self):
        response = self._signup("Admin@Acme.test")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn("token", response.data)
        self.assertEqual(response.data["user"]["role"], Role.ADMIN)
        self.assertEqual(response.data["user"]["email"], "admin@acme.test")
        self.assertNotIn("password", response.data["user"])
        self.assertIn(settings.JWT_REFRESH_COOKIE, response.cookies)
        self.assertTrue(response.cookies[settings.JWT_REFRESH_COOKIE]["httponly"])

    def test_later_users_are_employees(self):
        self._signup("admin@acme.test")
        response = self._signup("dev@acme.test")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user"]["role"], Role.EMPLOYEE)
        self.assertEqual(Organization.objects.filter(name="Acme").count(), 1)

    def test_duplicate_email_in_org(self):
        self._signup("admin@acme.test")
        response = self._signup("ADMIN@acme.test")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "User already exists")
        self.assertEqual(User.objects.count(), 1)

    def test_same_email_in_another_org_is_allowed(self):
        self._signup("admin@acme.test")
        response = self._signup("admin@acme.test", organization="Globex")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user"]["role"], Role.ADMIN)

    def test_missing_email_or_password(self):
        response = self.client.post(self.url, {"email": "x@y.test"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Validation error")
        self.assertIn("password", response.data["errors"])

    def test_default_organization(self):
        response = self.client.post(self.url, {"email": "solo@x.test", "password": "secret123"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user"]["org_name"], settings.DEFAULT_ORGANIZATION_NAME)


class LoginTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.org = Organization.objects.create(name="Acme")
        self.user = User.objects.create_user(
            email="admin@acme.test", password="secret123", org=self.org, role=Role.ADMIN
        )

    def test_login_success_returns_token_with_claims(self):
        response = self.client.post(
            "/api/auth/login/", {"email": "Admin@acme.test", "password": "secret123"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        token = AccessToken(response.data["token"])
        self.assertEqual(token["role"], Role.ADMIN)
        self.assertEqual(token["org_id"], str(self.org.id))

        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)

    def test_wrong_password(self):
        response = self.client.post(
            "/api/auth/login/", {"email": "admin@acme.test", "password": "nope"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Invalid credentials")

    def test_disabled_user_cannot_login(self):
        self.user.status = UserStatus.DISABLED
        self.user.save()

        response = self.client.post(
            "/api/auth/login/", {"email": "admin@acme.test", "password": "secret123"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_bearer_token_grants_access(self):
        response = self.client.post(
            "/api/auth/login/", {"email": "admin@acme.test", "password": "secret123"}, format="json"
        )
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['token']}")

        me = self.client.get("/api/auth/me/")
        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["email"], "admin@acme.test")

    def test_garbage_bearer_token_is_401(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        self.assertEqual(self.client.get("/api/auth/me/").status_code, status.HTTP_401_UNAUTHORIZED)


class RefreshAndLogoutTests(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.org = Organization.objects.create(name="Acme")
        self.user = User.objects.create_user(
            email="dev@acme.test", password="secret123", org=self.org
        )

    def test_refresh_without_cookie(self):
        response = self.client.post("/api/auth/refresh/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["message"], "No refresh token")

    def test_refresh_with_invalid_cookie(self):
        self.client.cookies[settings.JWT_REFRESH_COOKIE] = "garbage"
        response = self.client.post("/api/auth/refresh/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["message"], "Invalid refresh token")

    def test_refresh_for_deleted_user(self):
        refresh = AuthService.tokens_for(self.user)
        self.user.delete()
        self.client.cookies[settings.JWT_REFRESH_COOKIE] = str(refresh)

        response = self.client.post("/api/auth/refresh/")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh_issues_new_access_token(self):
        self.client.post("/api/auth/login/", {"email": "dev@acme.test", "password": "secret123"}, format="json")

        response = self.client.post("/api/auth/refresh/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(AccessToken(response.data["token"])["role"], Role.EMPLOYEE)

    def test_logout_clears_cookie(self):
        self.client.post("/api/auth/login/", {"email": "dev@acme.test", "password": "secret123"}, format="json")

        response = self.client.post("/api/auth/logout/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.cookies[settings.JWT_REFRESH_COOKIE].value, "")


class OrganizationGuardTests(TestCase):

    def test_user_without_org_is_refused(self):
        orphan = User.objects.create_user(email="orphan@x.test", password="secret123")
        client = APIClient()
        client.force_authenticate(orphan)

        response = client.get("/api/assets/")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["message"], "Organization not found on user profile")

    def test_employee_cannot_write(self):
        org = Organization.objects.create(name="Acme")
        employee = User.objects.create_user(email="e@acme.test", password="secret123", org=org)
        client = APIClient()
        client.force_authenticate(employee)

        response = client.post("/api/categories/", {"name": "Laptops"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["message"], "Forbidden")
