from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import CategoryViewSet, LocationViewSet

router = DefaultRouter()
router.register(r"categories", CategoryViewSet, basename="category")
router.register(r"locations", LocationViewSet, basename="location")

urlpatterns = [
    path("", include(router.urls)),
]
