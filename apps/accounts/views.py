from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.utils.throttle import BurstRateThrottle
from .serializers import SignupSerializer, LoginSerializer, UserSerializer
from .services import AuthService


def _set_refresh_cookie(response, refresh):
    response.set_cookie(
        settings.JWT_REFRESH_COOKIE,
        str(refresh),
        max_age=int(settings.SIMPLE_JWT["REFRESH_TOKEN_LIFETIME"].total_seconds()),
        httponly=True,
        secure=settings.JWT_REFRESH_COOKIE_SECURE,
        samesite="Lax",
        path="/api/auth/",
    )


class SignupView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [BurstRateThrottle]

    def post(self, request):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, refresh = AuthService.signup(**serializer.validated_data)

        response = Response(
            {"token": str(refresh.access_token), "user": UserSerializer(user).data},
            status=status.HTTP_201_CREATED
        )
        _set_refresh_cookie(response, refresh)
        return response


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [BurstRateThrottle]

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, refresh = AuthService.login(
            request,
            email=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
        )

        response = Response({"token": str(refresh.access_token), "user": UserSerializer(user).data})
        _set_refresh_cookie(response, refresh)
        return response


class RefreshView(APIView):
    """
    Issues a new access token from the httpOnly refresh cookie.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        user, access = AuthService.refresh_access(request.COOKIES.get(settings.JWT_REFRESH_COOKIE))
        return Response({"token": str(access), "user": UserSerializer(user).data})


class LogoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        response = Response({"message": "Logged out"})
        response.delete_cookie(settings.JWT_REFRESH_COOKIE, path="/api/auth/", samesite="Lax")
        return response


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)
