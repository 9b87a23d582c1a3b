import re
from dataclasses import dataclass
from typing import Optional, Tuple

from django.conf import settings
from rest_framework.authentication import BaseAuthentication
from rest_framework import exceptions

MAX_TENANT_ID_LENGTH = 150
_TENANT_ID_RE = re.compile(r"^[A-Za-z0-9!\-_.*'()]+$")


def validate_tenant_id(tenant_id: str) -> str:
    """ValueError si l'identifiant n'est pas utilisable comme org id."""
    if not tenant_id:
        raise ValueError("empty tenant id")
    if len(tenant_id) > MAX_TENANT_ID_LENGTH:
        raise ValueError(f"tenant id too long (max {MAX_TENANT_ID_LENGTH})")
    if tenant_id in (".", ".."):
        raise ValueError("tenant id must not be '.' or '..'")
    if not _TENANT_ID_RE.match(tenant_id):
        raise ValueError("tenant id contains unsupported characters")
    return tenant_id


@dataclass
class TenantUser:
    tenant_id: str
    is_authenticated: bool = True
    is_staff: bool = False


class TenantHeaderAuthentication(BaseAuthentication):
    """
    Identifie le tenant via l'en-tête X-Scope-OrgID (posé par le proxy amont).
    Sans en-tête: None, les autres classes d'auth (session/basic) prennent le relais.
    """

    def authenticate(self, request) -> Optional[Tuple[TenantUser, None]]:
        header = settings.QUERY_LIMITS_TENANT_HEADER
        raw = request.META.get("HTTP_" + header.upper().replace("-", "_"))
        if raw is None:
            return None

        try:
            tenant_id = validate_tenant_id(raw.strip())
        except ValueError as e:
            raise exceptions.AuthenticationFailed(f"Invalid {header}: {e}")

        request.tenant_id = tenant_id
        return (TenantUser(tenant_id=tenant_id), None)

    def authenticate_header(self, request):
        return settings.QUERY_LIMITS_TENANT_HEADER
