"""Back-office session credential.

The API access token and the logged-in user's profile live in the Django
session after login. :class:`AuthSessionMiddleware` turns them into an
:class:`AuthSession` on ``request.auth_session`` once per request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

SESSION_KEY = "api_auth"
MANAGER_ROLES = ("ADMIN", "MANAGER")


@dataclass(frozen=True)
class AuthSession:
    token: str | None = None
    user: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_session(cls, session) -> "AuthSession":
        stored = session.get(SESSION_KEY) or {}
        return cls(token=stored.get("accessToken"), user=stored.get("user") or {})

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def role(self) -> str | None:
        return self.user.get("role")

    @property
    def can_manage(self) -> bool:
        return self.role in MANAGER_ROLES

    @property
    def display_name(self) -> str:
        return self.user.get("name") or self.user.get("email") or ""

    def store(self, session) -> None:
        session[SESSION_KEY] = {"accessToken": self.token, "user": self.user}
        session.cycle_key()

    @staticmethod
    def clear(session) -> None:
        session.pop(SESSION_KEY, None)


class AuthSessionMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.auth_session = AuthSession.from_session(request.session)
        return self.get_response(request)
