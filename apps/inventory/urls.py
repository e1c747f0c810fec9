from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import InventoryItemViewSet

router = SimpleRouter()
router.register(r"", InventoryItemViewSet, basename="inventory")

urlpatterns = [
    path("", include(router.urls)),
]
