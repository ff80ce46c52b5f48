from django.conf import settings
from rest_framework import serializers

from .models import JobRecord


class UploadCreateSerializer(serializers.Serializer):
    # allow_empty_file defaults to False, so 0-byte uploads fail validation
    file = serializers.FileField()

    def validate_file(self, value):
        limit = settings.PIPELINE_MAX_UPLOAD_SIZE
        if value.size > limit:
            raise serializers.ValidationError(f"File too large: {value.size} bytes, limit is {limit} bytes.")
        return value


class JobCreatedSerializer(serializers.Serializer):
    jobId = serializers.CharField()


class JobStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=JobRecord.Status.choices)


class JobResultSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=JobRecord.Status.choices)
    result = serializers.JSONField()
