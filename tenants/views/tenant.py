from django.shortcuts import get_object_or_404
from django.db import transaction
from rest_framework import viewsets, status, mixins
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from ..models import Tenant, Plan
from ..serializers.tenant import (
    TenantOutSerializer, TenantCreateSerializer, TenantUpdateSerializer
)
from ..serializers.plan import PlanOutSerializer, PlanCreateUpdateSerializer


class TenantAdminViewSet(viewsets.GenericViewSet,
                         mixins.ListModelMixin,
                         mixins.RetrieveModelMixin):
    """
    Super-admin: CRUD Tenants.
    """
    permission_classes = [IsAdminUser]
    serializer_class = TenantOutSerializer
    queryset = Tenant.objects.select_related("plan").all().order_by("-created_at")
    filterset_fields = ("plan",)

    @transaction.atomic
    def create(self, request):
        ser = TenantCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        tenant = ser.save()
        return Response(TenantOutSerializer(tenant).data, status=status.HTTP_201_CREATED)

    @transaction.atomic
    def partial_update(self, request, pk=None):
        tenant = get_object_or_404(Tenant, pk=pk)
        ser = TenantUpdateSerializer(instance=tenant, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        ser.save()
        return Response(TenantOutSerializer(tenant).data, status=status.HTTP_200_OK)


class PlanAdminViewSet(viewsets.GenericViewSet,
                       mixins.ListModelMixin,
                       mixins.RetrieveModelMixin):
    """
    Super-admin: gestion des Plans (plafonds par défaut).
    """
    permission_classes = [IsAdminUser]
    serializer_class = PlanOutSerializer
    queryset = Plan.objects.all().order_by("-created_at")

    @transaction.atomic
    def create(self, request):
        ser = PlanCreateUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        p = ser.save()
        return Response(PlanOutSerializer(p).data, status=status.HTTP_201_CREATED)

    @transaction.atomic
    def partial_update(self, request, pk=None):
        p = get_object_or_404(Plan, pk=pk)
        ser = PlanCreateUpdateSerializer(instance=p, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        ser.save()
        return Response(PlanOutSerializer(p).data, status=status.HTTP_200_OK)
