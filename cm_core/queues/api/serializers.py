# cm_core/queues/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cm_core.queues.models import QueueEntry, QueueStatus


class QueueEntrySerializer(serializers.ModelSerializer):
    patient_name = serializers.CharField(source="patient.full_name", read_only=True)
    medical_record_number = serializers.CharField(source="patient.medical_record_number", read_only=True)

    class Meta:
        model = QueueEntry
        fields = [
            "id",
            "patient",
            "patient_name",
            "medical_record_number",
            "queue_number",
            "queue_date",
            "status",
            "priority",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class QueueCreateSerializer(serializers.Serializer):
    patient_id = serializers.IntegerField()
    priority = serializers.IntegerField(required=False, default=0)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    # defaults to today in the clinic's time zone
    queue_date = serializers.DateField(required=False, allow_null=True, default=None)


class QueueStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=QueueStatus.choices)
