import asyncio

import pytest

from slotserver.errors import SpinInProgressError, UnauthorizedError


def test_guest_session_gets_start_balance(ledger, config_store):
    session_id = ledger.create_guest_session()
    assert ledger.get_balance(session_id) == config_store.get().start_balance_minor == 100000
    assert ledger.get(session_id).spinning is False


def test_start_balance_follows_active_config(ledger, config_store):
    asyncio.run(config_store.set({'startBalanceMinor': 777}))
    assert ledger.get_balance(ledger.create_guest_session()) == 777


def test_session_ids_are_unique(ledger):
    ids = {ledger.create_guest_session() for _ in range(50)}
    assert len(ids) == 50
    assert len(ledger) == 50


@pytest.mark.parametrize("session_id", [None, '', 'nope'])
def test_unknown_session_is_unauthorized(ledger, session_id):
    with pytest.raises(UnauthorizedError):
        ledger.get_balance(session_id)


def test_spinning_guard_rejects_overlap_and_always_releases(ledger):
    session_id = ledger.create_guest_session()
    with ledger.spinning(session_id) as record:
        assert record.spinning is True
        with pytest.raises(SpinInProgressError):
            with ledger.spinning(session_id):
                pass
        assert record.spinning is True
    assert ledger.get(session_id).spinning is False

    with pytest.raises(RuntimeError):
        with ledger.spinning(session_id):
            raise RuntimeError("boom")
    assert ledger.get(session_id).spinning is False


def test_guard_is_per_session(ledger):
    first = ledger.create_guest_session()
    second = ledger.create_guest_session()
    with ledger.spinning(first):
        with ledger.spinning(second) as record:
            assert record.spinning is True


def test_settle_debits_then_credits(ledger):
    session_id = ledger.create_guest_session()
    assert ledger.settle(session_id, 100, 0) == 99900
    assert ledger.settle(session_id, 100, 500) == 100300


def test_clear(ledger):
    session_id = ledger.create_guest_session()
    ledger.clear()
    assert len(ledger) == 0
    with pytest.raises(UnauthorizedError):
        ledger.get_balance(session_id)
