"""Auth — проверка доступа через внешний сервис идентификации."""

from .session_gate import (
    AccessDecision,
    AccessResult,
    IdentityService,
    SessionCache,
    SessionGate,
)

__all__ = [
    "AccessDecision",
    "AccessResult",
    "IdentityService",
    "SessionCache",
    "SessionGate",
]
