from rest_framework import serializers

from limits.serializers.fields import LimitDurationField
from ..models import Plan


class PlanOutSerializer(serializers.ModelSerializer):
    query_timeout = LimitDurationField(allow_null=True)
    max_query_lookback = LimitDurationField(allow_null=True)
    max_query_length = LimitDurationField(allow_null=True)

    class Meta:
        model = Plan
        fields = (
            "id", "name", "slug", "active",
            "query_timeout", "max_query_lookback", "max_query_length",
            "max_entries_limit_per_query", "created_at",
        )
        read_only_fields = fields


class PlanCreateUpdateSerializer(serializers.ModelSerializer):
    query_timeout = LimitDurationField(required=False, allow_null=True)
    max_query_lookback = LimitDurationField(required=False, allow_null=True)
    max_query_length = LimitDurationField(required=False, allow_null=True)

    class Meta:
        model = Plan
        fields = (
            "name", "slug", "active",
            "query_timeout", "max_query_lookback", "max_query_length",
            "max_entries_limit_per_query",
        )
