"""Owner (authority) check."""

from __future__ import annotations

from .resolver import UserIdentity

__all__ = ["OwnerValidator"]


class OwnerValidator:
    """
    Decides owner status by exact comparison with one configured user id.

    Nothing else counts: roles, nicknames, guild permissions and admin rights
    are all ignored.
    """

    def __init__(self, owner_id: str) -> None:
        self._owner_id = str(owner_id).strip()

    @property
    def owner_id(self) -> str:
        """For logging only; compare through :meth:`is_owner`."""
        return self._owner_id

    def is_owner(self, identity: UserIdentity) -> bool:
        if not self._owner_id:
            return False
        return identity.id == self._owner_id
