from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping
from uuid import UUID

from src.application.errors import AuthError


@dataclass(slots=True)
class AuthContext:
    user_id: UUID
    tenant_id: UUID
    claims: dict[str, Any] = field(default_factory=dict)


def _as_uuid(value: Any, what: str) -> UUID:
    try:
        return UUID(str(value))
    except ValueError as exc:
        raise AuthError(f"Token {what} is not a valid UUID") from exc


def context_from_claims(claims: Mapping[str, Any]) -> AuthContext:
    """The ``sub`` claim is the user; ``tenant_id`` selects the winery account."""
    subject = claims.get("sub")
    if not subject:
        raise AuthError("Token missing subject")
    user_id = _as_uuid(subject, "subject")
    tenant_claim = claims.get("tenant_id")
    tenant_id = _as_uuid(tenant_claim, "tenant_id") if tenant_claim else user_id
    return AuthContext(user_id=user_id, tenant_id=tenant_id, claims=dict(claims))
