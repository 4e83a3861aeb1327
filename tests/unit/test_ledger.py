"""Tests for InMemoryLedger."""

import pytest

from amm.errors import TransferFailed
from amm.ledger import POOL_CUSTODY, InMemoryLedger, Ledger
from tests.helpers import ALICE, BOB, TOKEN_A, TOKEN_B


@pytest.fixture
def ledger() -> InMemoryLedger:
    ledger = InMemoryLedger()
    ledger.mint(TOKEN_A, ALICE, 1000)
    return ledger


def test_satisfies_protocol(ledger):
    assert isinstance(ledger, Ledger)


def test_pull_moves_into_custody(ledger):
    ledger.pull(TOKEN_A, ALICE, 300)
    assert ledger.balance_of(TOKEN_A, ALICE) == 700
    assert ledger.balance_of(TOKEN_A, POOL_CUSTODY) == 300


def test_push_moves_out_of_custody(ledger):
    ledger.pull(TOKEN_A, ALICE, 300)
    ledger.push(TOKEN_A, BOB, 100)
    assert ledger.balance_of(TOKEN_A, BOB) == 100
    assert ledger.balance_of(TOKEN_A, POOL_CUSTODY) == 200


def test_balances_are_case_insensitive(ledger):
    assert ledger.balance_of(TOKEN_A.upper().replace("0X", "0x"), ALICE) == 1000


def test_insufficient_balance_fails(ledger):
    with pytest.raises(TransferFailed, match="Insufficient balance"):
        ledger.pull(TOKEN_A, ALICE, 1001)
    with pytest.raises(TransferFailed):
        ledger.push(TOKEN_B, BOB, 1)
    assert ledger.balance_of(TOKEN_A, ALICE) == 1000


def test_negative_mint_rejected(ledger):
    with pytest.raises(ValueError):
        ledger.mint(TOKEN_A, ALICE, -1)


class TestAtomic:
    def test_commits_on_success(self, ledger):
        with ledger.atomic():
            ledger.pull(TOKEN_A, ALICE, 10)
        assert ledger.balance_of(TOKEN_A, ALICE) == 990

    def test_rolls_back_on_error(self, ledger):
        with pytest.raises(TransferFailed):
            with ledger.atomic():
                ledger.pull(TOKEN_A, ALICE, 600)
                ledger.pull(TOKEN_A, ALICE, 600)
        assert ledger.balance_of(TOKEN_A, ALICE) == 1000
        assert ledger.balance_of(TOKEN_A, POOL_CUSTODY) == 0


class TestHooks:
    def test_hook_sees_each_transfer(self, ledger):
        seen = []
        ledger.add_hook(lambda *args: seen.append(args))
        ledger.pull(TOKEN_A, ALICE, 5)
        assert seen == [(TOKEN_A, ALICE, POOL_CUSTODY, 5)]

    def test_clear_hooks(self, ledger):
        seen = []
        ledger.add_hook(lambda *args: seen.append(args))
        ledger.clear_hooks()
        ledger.pull(TOKEN_A, ALICE, 5)
        assert seen == []


def test_transfer_to_same_account_fails():
    """Custody cannot pull from itself, which would credit a deposit for free."""
    ledger = InMemoryLedger()
    ledger.mint(TOKEN_A, POOL_CUSTODY, 1000)
    with pytest.raises(TransferFailed, match="same account"):
        ledger.pull(TOKEN_A, POOL_CUSTODY, 500)
    with pytest.raises(TransferFailed, match="same account"):
        ledger.push(TOKEN_A, POOL_CUSTODY, 500)
    assert ledger.balance_of(TOKEN_A, POOL_CUSTODY) == 1000
