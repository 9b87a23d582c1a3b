from rest_framework import serializers

from limits.models import TenantLimitOverride
from limits.serializers.fields import LimitDurationField

_LIMIT_FIELDS = ("query_timeout", "max_query_lookback", "max_query_length", "max_entries_limit_per_query")


class TenantLimitOverrideOutSerializer(serializers.ModelSerializer):
    query_timeout = LimitDurationField(allow_null=True)
    max_query_lookback = LimitDurationField(allow_null=True)
    max_query_length = LimitDurationField(allow_null=True)

    class Meta:
        model = TenantLimitOverride
        fields = ("id", "tenant", *_LIMIT_FIELDS, "updated_at")
        read_only_fields = fields

class TenantLimitOverrideUpsertSerializer(serializers.ModelSerializer):
    query_timeout = LimitDurationField(required=False, allow_null=True)
    max_query_lookback = LimitDurationField(required=False, allow_null=True)
    max_query_length = LimitDurationField(required=False, allow_null=True)

    class Meta:
        model = TenantLimitOverride
        fields = ("tenant", *_LIMIT_FIELDS)


class EffectiveLimitsSerializer(serializers.Serializer):
    query_timeout = LimitDurationField()
    max_query_lookback = LimitDurationField()
    max_query_length = LimitDurationField()
    max_entries_limit_per_query = serializers.IntegerField()


class LimitViolationSerializer(serializers.Serializer):
    dimension = serializers.CharField()
    requested = serializers.JSONField()
    limit = serializers.JSONField()


class LimitExceededErrorSerializer(serializers.Serializer):
    code = serializers.CharField()
    message = serializers.CharField()
    details = LimitViolationSerializer(many=True)


class LimitExceededResponseSerializer(serializers.Serializer):
    error = LimitExceededErrorSerializer()
