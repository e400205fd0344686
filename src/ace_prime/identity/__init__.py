"""User identity resolution and the owner check."""

from .owner import OwnerValidator
from .resolver import IdentityResolver, UserIdentity

__all__ = ["IdentityResolver", "OwnerValidator", "UserIdentity"]
