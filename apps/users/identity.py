"""Identity of the caller as seen by the listing services."""

from __future__ import annotations

from dataclasses import dataclass

from shared.domain.base import ValueObject
from shared.domain.exceptions import Unauthenticated

from .models import AccountType


@dataclass(frozen=True)
class Identity(ValueObject):
    user_id: int
    account_type: AccountType

    @property
    def is_owner(self) -> bool:
        return self.account_type == AccountType.OWNER


def resolve_identity(user) -> Identity:  # type: ignore
    """Map an authenticated Django user onto an Identity.

    Anonymous users and inactive accounts raise ``Unauthenticated``.
    """
    if user is None or not getattr(user, "is_authenticated", False) or not user.is_active:
        raise Unauthenticated()
    return Identity(user_id=user.pk, account_type=AccountType(user.account_type))
