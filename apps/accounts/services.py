import logging

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.models import update_last_login
from django.db import transaction
from rest_framework import status
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from apps.utils.exceptions import BusinessLogicException
from .models import Organization, Role

logger = logging.getLogger(__name__)
User = get_user_model()


class AuthService:

    @staticmethod
    def tokens_for(user) -> RefreshToken:
        """
        Refresh token carrying the role and org claims.
        The access token derived from it inherits both.
        """
        refresh = RefreshToken.for_user(user)
        refresh["role"] = user.role
        refresh["org_id"] = str(user.org_id) if user.org_id else None
        return refresh

    @staticmethod
    @transaction.atomic
    def signup(email, password, first_name="", last_name="", organization=None):
        org_name = (organization or "").strip() or settings.DEFAULT_ORGANIZATION_NAME
        org, org_created = Organization.objects.get_or_create(name=org_name)

        if User.objects.filter(org=org, email__iexact=email).exists():
            raise BusinessLogicException("User already exists", code="user_exists")

        # The first account of an organization administers it
        is_first = org_created or not User.objects.filter(org=org).exists()
        user = User.objects.create_user(
            email=email,
            password=password,
            org=org,
            first_name=first_name,
            last_name=last_name,
            role=Role.ADMIN if is_first else Role.EMPLOYEE,
        )
        logger.info("User signed up", extra={"user_id": user.id, "org_id": org.id})
        return user, AuthService.tokens_for(user)

    @staticmethod
    def login(request, email, password):
        user = authenticate(request, email=email, password=password)
        if user is None:
            logger.info("Failed login attempt")
            raise BusinessLogicException("Invalid credentials", code="invalid_credentials")

        update_last_login(None, user)
        return user, AuthService.tokens_for(user)

    @staticmethod
    def refresh_access(raw_refresh):
        if not raw_refresh:
            raise BusinessLogicException(
                "No refresh token", code="no_refresh_token", status_code=status.HTTP_401_UNAUTHORIZED
            )

        invalid = BusinessLogicException(
            "Invalid refresh token", code="invalid_refresh_token", status_code=status.HTTP_401_UNAUTHORIZED
        )
        try:
            token = RefreshToken(raw_refresh)
        except TokenError:
            raise invalid

        user_id = token.get(settings.SIMPLE_JWT.get("USER_ID_CLAIM", "user_id"))
        user = User.objects.filter(pk=user_id, is_active=True).first()
        if user is None:
            raise invalid

        return user, AuthService.tokens_for(user).access_token
