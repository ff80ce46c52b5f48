from django.urls import path
from .views import UploadView, JobStatusView, JobResultView

urlpatterns = [
    path("upload", UploadView.as_view(), name="upload"),
    path("upload/<str:job_id>/status", JobStatusView.as_view(), name="job_status"),
    path("upload/<str:job_id>/result", JobResultView.as_view(), name="job_result"),
]
