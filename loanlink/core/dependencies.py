import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

from fastapi import Depends, HTTPException, Request, status

from loanlink.core.database import Database, get_db
from loanlink.core.security import UNAUTHORIZED_DETAIL, decode_token, extract_token
from loanlink.modules.users.models import UserRole, role_satisfies
from loanlink.modules.users.services import UserService

logger = logging.getLogger(__name__)

FORBIDDEN_DETAIL = "forbidden access"


@dataclass
class GuardResult:
    """Outcome of a single guard: pass, or fail with a status code and reason"""
    passed: bool
    status_code: int = status.HTTP_200_OK
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "GuardResult":
        return cls(passed=True)

    @classmethod
    def fail(cls, status_code: int, reason: str) -> "GuardResult":
        return cls(passed=False, status_code=status_code, reason=reason)


@dataclass
class RequestContext:
    """Per-request state handed from the guards to the handler"""
    request: Request
    db: Database
    claims: Optional[Dict[str, Any]] = None
    user: Optional[Dict[str, Any]] = field(default=None, repr=False)

    @property
    def email(self) -> Optional[str]:
        return self.claims.get("email") if self.claims else None


Guard = Callable[[RequestContext], Awaitable[GuardResult]]


async def is_authenticated(context: RequestContext) -> GuardResult:
    """Require a valid session token and attach its claims to the context"""
    token = extract_token(context.request)
    if not token:
        return GuardResult.fail(status.HTTP_401_UNAUTHORIZED, UNAUTHORIZED_DETAIL)

    try:
        context.claims = decode_token(token)
    except HTTPException as exc:
        return GuardResult.fail(exc.status_code, exc.detail)

    return GuardResult.ok()


def role_at_least(minimum: UserRole) -> Guard:
    """Build a guard that requires the caller's stored role to reach ``minimum``"""

    async def guard(context: RequestContext) -> GuardResult:
        if context.claims is None:
            return GuardResult.fail(status.HTTP_401_UNAUTHORIZED, UNAUTHORIZED_DETAIL)

        if context.user is None:
            context.user = await UserService(context.db).get_by_email(context.email)

        role = context.user.get("role") if context.user else None
        if not role_satisfies(role, minimum):
            return GuardResult.fail(status.HTTP_403_FORBIDDEN, FORBIDDEN_DETAIL)
        return GuardResult.ok()

    guard.__name__ = f"role_at_least_{minimum.value}"
    return guard


class Guarded:
    """
    Dependency that runs an ordered list of guards before the handler.

    The first failing guard stops the chain and its status code and reason
    become the response. On success the handler receives the RequestContext.
    """

    def __init__(self, *guards: Guard):
        self.guards = guards

    async def __call__(
        self,
        request: Request,
        db: Database = Depends(get_db)
    ) -> RequestContext:
        context = RequestContext(request=request, db=db)
        for guard in self.guards:
            result = await guard(context)
            if not result.passed:
                logger.debug(
                    f"{guard.__name__} rejected {request.method} {request.url.path}: "
                    f"{result.status_code} {result.reason}"
                )
                raise HTTPException(status_code=result.status_code, detail=result.reason)
        return context


authenticated = Guarded(is_authenticated)
manager_required = Guarded(is_authenticated, role_at_least(UserRole.MANAGER))
admin_required = Guarded(is_authenticated, role_at_least(UserRole.ADMIN))
