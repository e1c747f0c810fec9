from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import LicenseViewSet

router = SimpleRouter()
router.register(r"", LicenseViewSet, basename="license")

urlpatterns = [
    path("", include(router.urls)),
]
