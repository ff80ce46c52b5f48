from rest_framework import status, views
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from .bootstrap import get_services
from .serializers import (
    UploadCreateSerializer,
    JobCreatedSerializer,
    JobStatusSerializer,
    JobResultSerializer,
)


class UploadView(views.APIView):
    """
    Accepts a multipart upload (field ``file``), stores it and queues the
    image job. Returns the job id straight away; progress is polled separately.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        ser = UploadCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        upload = ser.validated_data["file"]
        job_id = get_services().intake.submit(upload.name, upload.read())

        out = JobCreatedSerializer({"jobId": job_id}).data
        return Response(out, status=status.HTTP_201_CREATED)


class JobStatusView(views.APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, job_id):
        job_status = get_services().query.get_status(job_id)
        return Response(JobStatusSerializer({"status": job_status}).data)


class JobResultView(views.APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, job_id):
        data = get_services().query.get_result(job_id)
        return Response(JobResultSerializer(data).data)
