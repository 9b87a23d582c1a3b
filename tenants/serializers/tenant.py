from rest_framework import serializers

from core.auth.tenant_header import validate_tenant_id
from ..models import Tenant, Plan
from .plan import PlanOutSerializer


class TenantOutSerializer(serializers.ModelSerializer):
    plan = serializers.SerializerMethodField()

    class Meta:
        model = Tenant
        fields = ("id", "name", "org_id", "plan", "metadata", "created_at", "updated_at")
        read_only_fields = fields

    def get_plan(self, obj: Tenant):
        p: Plan = obj.plan
        return PlanOutSerializer(p).data


class TenantCreateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tenant
        fields = ("name", "org_id", "plan", "metadata")

    def validate_org_id(self, value):
        try:
            return validate_tenant_id(value)
        except ValueError as e:
            raise serializers.ValidationError(str(e))


class TenantUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tenant
        fields = ("plan", "metadata")
