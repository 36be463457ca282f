"""Explicit identity passed into services."""

from dataclasses import dataclass
from typing import Optional

from fintrack.domain.errors import UnauthorizedError


@dataclass(frozen=True)
class Session:
    """The signed-in user as supplied by the identity provider.

    The user id is opaque; fintrack never inspects credentials.
    """

    user_id: str

    @classmethod
    def from_user_id(cls, user_id: Optional[str]) -> "Session":
        """Build a session, rejecting a missing identity.

        Raises:
            UnauthorizedError: If no user id was supplied
        """
        if user_id is None or not str(user_id).strip():
            raise UnauthorizedError(
                "No user signed in. Pass --user or set FINTRACK_USER."
            )
        return cls(user_id=str(user_id).strip())
