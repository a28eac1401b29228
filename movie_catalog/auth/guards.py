"""
Request authorization.

This module provides:
- The user token guard (Authorization: Bearer <token>)
- The API key guard for administrative writes (x-api-token)
- A per-route policy table deciding which guards apply
- The FastAPI dependency that enforces the policy on every API route
"""
import hmac
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from fastapi import HTTPException, Request, status

from movie_catalog.auth.users import AuthService
from movie_catalog.base_service import BaseService
from movie_catalog.errors import UnauthorizedError

AUTHORIZATION_HEADER = "authorization"
API_TOKEN_HEADER = "x-api-token"
BEARER_PREFIX = "Bearer "

guard_service = BaseService("movie_catalog.guards")


@dataclass(frozen=True)
class RoutePolicy:
    """Which guards a route requires."""
    user: bool = True
    api_key: bool = False


PUBLIC = RoutePolicy(user=False, api_key=False)
USER = RoutePolicy(user=True, api_key=False)
API_KEY = RoutePolicy(user=False, api_key=True)
USER_AND_API_KEY = RoutePolicy(user=True, api_key=True)

# Route name -> policy. Routes not listed here require a user token.
ROUTE_POLICIES: Dict[str, RoutePolicy] = {
    "health": PUBLIC,
    "auth.login": PUBLIC,
    "auth.register": PUBLIC,
    "auth.me": USER,
    "movies.create": API_KEY,
    "movies.update": API_KEY,
    "movies.delete": API_KEY,
    "actors.create": API_KEY,
    "actors.update": API_KEY,
    "actors.delete": API_KEY,
    "ratings.create": API_KEY,
    "ratings.update": API_KEY,
    "ratings.delete": API_KEY,
}


def policy_for(route_name: Optional[str]) -> RoutePolicy:
    if route_name is None:
        return USER
    return ROUTE_POLICIES.get(route_name, USER)


@dataclass
class GuardDecision:
    """Outcome of evaluating one or more guards for a request."""
    allowed: bool
    reason: str = ""
    scheme: str = "Bearer"
    payload: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def allow(cls, payload: Optional[Dict[str, Any]] = None) -> "GuardDecision":
        return cls(allowed=True, payload=payload)

    @classmethod
    def deny(cls, reason: str, scheme: str = "Bearer") -> "GuardDecision":
        return cls(allowed=False, reason=reason, scheme=scheme)


def strip_bearer(value: str) -> str:
    if value.startswith(BEARER_PREFIX):
        return value[len(BEARER_PREFIX):].strip()
    return value


def check_user_token(headers: Mapping[str, str], auth_service: AuthService) -> GuardDecision:
    """
    Verify the caller's access token.

    The token is read from ``Authorization`` with ``x-api-token`` as a
    fallback; a ``Bearer `` prefix is optional.
    """
    provided = headers.get(AUTHORIZATION_HEADER) or headers.get(API_TOKEN_HEADER)
    if not provided:
        return GuardDecision.deny("Missing Authorization header")
    try:
        payload = auth_service.verify_token(strip_bearer(provided))
    except UnauthorizedError:
        return GuardDecision.deny("Invalid or expired token")
    return GuardDecision.allow(payload)


def check_api_key(headers: Mapping[str, str], api_token: str) -> GuardDecision:
    """
    Compare the caller's API token with the configured secret.

    Missing and wrong tokens are reported the same way.
    """
    provided = headers.get(API_TOKEN_HEADER) or headers.get(AUTHORIZATION_HEADER)
    if provided:
        for candidate in (strip_bearer(provided), provided):
            if hmac.compare_digest(candidate.encode("utf-8"), api_token.encode("utf-8")):
                return GuardDecision.allow()
    return GuardDecision.deny("Invalid or missing API token", scheme="APIKey")


def evaluate(
    policy: RoutePolicy,
    headers: Mapping[str, str],
    auth_service: AuthService,
    api_token: str,
) -> GuardDecision:
    """Run every guard the policy requires; the first denial wins."""
    decision = GuardDecision.allow()
    if policy.user:
        decision = check_user_token(headers, auth_service)
        if not decision.allowed:
            return decision
    if policy.api_key:
        key_decision = check_api_key(headers, api_token)
        if not key_decision.allowed:
            return key_decision
    return decision


async def authorize(request: Request) -> None:
    """
    Application-wide dependency enforcing the route's policy.

    Raises:
        HTTPException: 401 if any required guard denies the request
    """
    route = request.scope.get("route")
    policy = policy_for(getattr(route, "name", None))
    decision = evaluate(
        policy,
        request.headers,
        request.app.state.auth_service,
        request.app.state.settings.api_token,
    )
    if not decision.allowed:
        guard_service.log_event("auth.denied", {
            "path": request.url.path,
            "method": request.method,
            "reason": decision.reason,
        })
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=decision.reason,
            headers={"WWW-Authenticate": decision.scheme},
        )
    request.state.user = decision.payload


async def get_current_user(request: Request) -> Dict[str, Any]:
    """
    Dependency returning the decoded token payload of the caller.

    Raises:
        HTTPException: 401 if the route was not authorized with a user token
    """
    payload = getattr(request.state, "user", None)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload
