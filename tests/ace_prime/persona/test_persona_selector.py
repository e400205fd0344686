from dataclasses import FrozenInstanceError
from unittest.mock import MagicMock

import pytest

from ace_prime.identity import IdentityResolver, OwnerValidator
from ace_prime.persona import InvalidUserError, PersonaSelector, PersonaType


@pytest.fixture
def audit():
    return MagicMock()


@pytest.fixture
def selector(audit):
    return PersonaSelector(IdentityResolver(), OwnerValidator("1000"), audit)


def test_owner_gets_butler(selector, audit, make_message):
    selection = selector.select_persona(make_message(author_id=1000, message_id=9, channel_id=77))

    assert selection.persona is PersonaType.BUTLER
    assert selection.is_owner is True
    assert selection.user_id == "1000"
    assert selection.message_id == "9"
    assert selection.channel_id == "77"
    audit.log_selection.assert_called_once_with(selection)


def test_everyone_else_gets_supervisor(selector, make_message):
    selection = selector.select_persona(make_message(author_id=42))

    assert selection.persona is PersonaType.SUPERVISOR
    assert selection.is_owner is False


def test_bot_author_rejected_and_audited(selector, audit, make_message):
    with pytest.raises(InvalidUserError):
        selector.select_persona(make_message(author_id=1000, bot=True))

    audit.log_error.assert_called_once()
    audit.log_selection.assert_not_called()


def test_preresolved_identity_is_used(selector, make_message):
    message = make_message(author_id=42)
    identity = IdentityResolver().resolve_identity(make_message(author_id=1000))

    selection = selector.select_persona(message, identity=identity)

    assert selection.persona is PersonaType.BUTLER


def test_selection_is_immutable(selector, make_message):
    selection = selector.select_persona(make_message())

    with pytest.raises(FrozenInstanceError):
        selection.persona = PersonaType.BUTLER


def test_get_persona_type(selector, make_message):
    assert selector.get_persona_type(make_message(author_id=1000)) is PersonaType.BUTLER
    assert selector.get_persona_type(make_message(author_id=1)) is PersonaType.SUPERVISOR
