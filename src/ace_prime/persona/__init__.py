"""Dual-persona selection (butler / supervisor)."""

from .audit import PersonaAuditLogger
from .selector import PersonaSelector
from .types import InvalidUserError, PersonaSelection, PersonaType

__all__ = [
    "InvalidUserError",
    "PersonaAuditLogger",
    "PersonaSelection",
    "PersonaSelector",
    "PersonaType",
]
