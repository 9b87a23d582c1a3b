from django.shortcuts import get_object_or_404
from django.db import transaction
from rest_framework import viewsets, status, mixins
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema, OpenApiExample, OpenApiResponse

from .exceptions import LimitExceeded, TenantLookupFailed
from .models import TenantLimitOverride
from .serializers.limits import (
    EffectiveLimitsSerializer, LimitExceededResponseSerializer,
    TenantLimitOverrideOutSerializer, TenantLimitOverrideUpsertSerializer,
)
from .context import extract_query_limits
from .services.limiter import QueryLimiter
from .services.query_limits import DIMENSIONS


class TenantLimitOverrideAdminViewSet(viewsets.GenericViewSet,
                                      mixins.ListModelMixin,
                                      mixins.RetrieveModelMixin):
    permission_classes = [IsAdminUser]
    serializer_class = TenantLimitOverrideOutSerializer
    filterset_fields = ("tenant",)

    def get_queryset(self):
        return TenantLimitOverride.objects.select_related("tenant").all().order_by("tenant_id")

    @transaction.atomic
    def create(self, request):
        ser = TenantLimitOverrideUpsertSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        obj = ser.save()
        return Response(TenantLimitOverrideOutSerializer(obj).data, status=status.HTTP_201_CREATED)

    @transaction.atomic
    def partial_update(self, request, pk=None):
        obj = get_object_or_404(TenantLimitOverride, pk=pk)
        ser = TenantLimitOverrideUpsertSerializer(instance=obj, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        obj = ser.save()
        return Response(TenantLimitOverrideOutSerializer(obj).data, status=status.HTTP_200_OK)


@extend_schema(
    tags=["Query limits"],
    responses={
        200: OpenApiResponse(response=EffectiveLimitsSerializer, description="Limites effectives du tenant"),
        400: OpenApiResponse(response=LimitExceededResponseSerializer, description="LIMIT_EXCEEDED"),
        # INVALID_QUERY_LIMITS est renvoyé par QueryLimitsMiddleware avant la vue
        500: OpenApiResponse(description="TENANT_LOOKUP_FAILED"),
    },
    examples=[
        OpenApiExample(
            "Réponse",
            value={
                "tenant_id": "acme",
                "limits": {
                    "query_timeout": "29s",
                    "max_query_lookback": "30d",
                    "max_query_length": "721h",
                    "max_entries_limit_per_query": 5000,
                },
                "overridden": ["query_timeout"],
            },
            response_only=True,
        ),
    ],
)
class EffectiveQueryLimitsView(APIView):
    """
    GET /limits/effective
    Auth: X-Scope-OrgID
    Override optionnel: X-Query-Limits (ne peut que resserrer les plafonds)
    """

    def get(self, request):
        tenant_id = request.tenant_id
        limiter = QueryLimiter()

        resolved, violations = {}, []
        try:
            for dimension in DIMENSIONS:
                try:
                    resolved[dimension] = limiter.resolve(dimension, request, tenant_id)
                except LimitExceeded as e:
                    violations.append(e)
        except TenantLookupFailed as e:
            return Response(
                {"error": {"code": "TENANT_LOOKUP_FAILED", "message": str(e)}},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        if violations:
            body = LimitExceededResponseSerializer({"error": {
                "code": "LIMIT_EXCEEDED",
                "message": "; ".join(str(v) for v in violations),
                "details": [v.as_details() for v in violations],
            }})
            return Response(
                body.data,
                status=status.HTTP_400_BAD_REQUEST,
            )

        limits = extract_query_limits(request)
        return Response({
            "tenant_id": tenant_id,
            "limits": EffectiveLimitsSerializer(resolved).data,
            "overridden": limits.overridden() if limits else [],
        }, status=200)
