# cm_core/reports/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from cm_core.reports.services import REPORT_FORMATS, REPORT_TYPES


class ReportRequestSerializer(serializers.Serializer):
    report_type = serializers.ChoiceField(choices=REPORT_TYPES)
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    format = serializers.ChoiceField(choices=REPORT_FORMATS)
    filters = serializers.DictField(required=False, default=dict)

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "End date must not be before start date."})
        return attrs


class ReportResultSerializer(serializers.Serializer):
    report_url = serializers.CharField()
    file_name = serializers.CharField()
    data = serializers.JSONField()


class DashboardStatsSerializer(serializers.Serializer):
    total_patients = serializers.IntegerField()
    today_queue = serializers.IntegerField()
    pending_lab_tests = serializers.IntegerField()
    pending_radiology = serializers.IntegerField()
    low_stock_medications = serializers.IntegerField()
    unpaid_invoices = serializers.IntegerField()
    today_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
