import re

import pytest

from staffrank.components.ledger.tokens import (
    authenticate_token,
    create_api_token,
    delete_api_token,
    hash_token,
    list_api_tokens,
    mask_token,
    set_token_active,
    touch_token_last_used,
)
from staffrank.components.ledger.weights import (
    delete_action_weight,
    get_action_weight,
    list_action_weights,
    resolve_weight,
    upsert_action_weight,
)
from staffrank.errors import NotFound, Unauthorized, UnknownAction, ValidationError
from staffrank.models import ApiToken


def test_created_token_secret_is_shown_once(db):
    issued = create_api_token(db, name="Game Server", source="minecraft")
    assert re.fullmatch(r"[0-9a-f]{64}", issued.secret)
    stored = db.query(ApiToken).one()
    assert stored.token_hash == hash_token(issued.secret)
    assert issued.secret not in (stored.token_hash, stored.token_prefix)
    assert mask_token(stored) == f"{issued.secret[:8]}…"
    assert stored.is_active is True


def test_token_requires_name_and_source(db):
    with pytest.raises(ValidationError):
        create_api_token(db, name=" ", source="minecraft")


def test_authenticate_matches_active_tokens_only(db):
    issued = create_api_token(db, name="Bot", source="discord")
    assert authenticate_token(db, issued.secret).id == issued.token.id

    set_token_active(db, issued.token.id, False)
    with pytest.raises(Unauthorized):
        authenticate_token(db, issued.secret)

    set_token_active(db, issued.token.id, True)
    assert authenticate_token(db, issued.secret).is_active


def test_list_and_delete_tokens(db):
    first = create_api_token(db, name="A", source="a")
    create_api_token(db, name="B", source="b")
    assert len(list_api_tokens(db)) == 2

    delete_api_token(db, first.token.id)
    assert [t.name for t in list_api_tokens(db)] == ["B"]
    with pytest.raises(NotFound):
        delete_api_token(db, first.token.id)
    with pytest.raises(NotFound):
        set_token_active(db, first.token.id, True)


def test_touch_last_used_swallows_storage_errors():
    class _BrokenSession:
        def get(self, *args, **kwargs):
            raise RuntimeError("connection reset")

        def rollback(self):
            pass

        def close(self):
            pass

    touch_token_last_used("any-id", session_factory=_BrokenSession)


def test_upsert_creates_then_updates(db):
    created = upsert_action_weight(db, " resolve_ticket ", 2.5, "Closed a support ticket")
    assert created.action == "resolve_ticket"
    assert resolve_weight(db, "resolve_ticket") == 2.5

    updated = upsert_action_weight(db, "resolve_ticket", -1, None)
    assert updated.id == created.id
    assert updated.weight == -1
    assert updated.description is None
    assert len(list_action_weights(db)) == 1


def test_weights_are_listed_by_action(db):
    upsert_action_weight(db, "zeta", 1)
    upsert_action_weight(db, "alpha", 2)
    assert [w.action for w in list_action_weights(db)] == ["alpha", "zeta"]


@pytest.mark.parametrize("weight", ["many", float("inf")])
def test_upsert_rejects_non_numeric_weight(db, weight):
    with pytest.raises(ValidationError):
        upsert_action_weight(db, "resolve_ticket", weight)


def test_blank_action_is_rejected(db):
    with pytest.raises(ValidationError):
        upsert_action_weight(db, "  ", 1)


def test_unknown_action_and_delete(db):
    with pytest.raises(UnknownAction):
        resolve_weight(db, "ghost")
    upsert_action_weight(db, "ghost", 1)
    delete_action_weight(db, "ghost")
    assert get_action_weight(db, "ghost") is None
    with pytest.raises(NotFound):
        delete_action_weight(db, "ghost")
