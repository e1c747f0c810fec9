from django.urls import path
from .views import ReportView

urlpatterns = [
    path("<slug:report>/", ReportView.as_view(), name="report-detail"),
]
