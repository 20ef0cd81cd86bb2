"""Authentication information for ghcolumns (token only)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from ghcolumns.errors import AuthError

DEFAULT_TOKEN_ENV: str = "GITHUB_TOKEN"


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    Supports personal access / app tokens only:
        kind = "token"
        data must include:
            - token
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind != "token":
            raise ValueError("AuthInfo.kind must be 'token'")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        value = self.data.get("token")
        if not isinstance(value, str) or not value.strip():
            raise ValueError("AuthInfo.data['token'] must be a non-empty string")

    @classmethod
    def from_token(cls, token: str) -> AuthInfo:
        return cls(kind="token", data={"token": token})

    @classmethod
    def from_env(cls, var: str = DEFAULT_TOKEN_ENV) -> AuthInfo:
        """
        Read the token from an environment variable.

        Raises:
            AuthError: if the variable is unset or blank.
        """
        token = os.environ.get(var, "").strip()
        if not token:
            raise AuthError(
                "GitHub token is not configured",
                details={"env_var": var},
            )
        return cls.from_token(token)

    @property
    def token(self) -> str:
        return str(self.data["token"])

    def __repr__(self) -> str:
        return f"AuthInfo(kind={self.kind!r}, data=<redacted>)"
