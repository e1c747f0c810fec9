# apps/notifications/views.py
from django.conf import settings
from rest_framework import generics, views, permissions
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from .models import Notification
from .serializers import NotificationSerializer
from .services import mark_all_read


class NotificationListView(generics.ListAPIView):
    """
    GET /api/notifications/ -> the caller's newest notifications
    """
    serializer_class = NotificationSerializer
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        return Notification.objects.filter(
            user=self.request.user
        ).order_by("-created_at")[:settings.NOTIFICATION_LIST_LIMIT]


class NotificationMarkReadView(views.APIView):
    """
    PATCH /api/notifications/<id>/read/
    """
    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request, pk):
        try:
            notif = Notification.objects.get(id=pk, user=request.user)
        except Notification.DoesNotExist:
            raise NotFound("Notification not found")
        notif.mark_read()
        return Response(NotificationSerializer(notif).data)

    post = patch


class NotificationMarkAllReadView(views.APIView):
    """
    POST /api/notifications/read-all/
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        updated = mark_all_read(request.user)
        return Response({"message": "All notifications marked as read", "updated": updated})
