#!/usr/bin/env python3
"""Tests for the convergence-aware transaction importer."""

from datetime import date, timedelta

import pytest

from finsync.core.dates import FinancialDate
from finsync.core.errors import AmountParseError, UnauthorizedError
from finsync.core.money import Money
from finsync.sync.importer import ImportResult, TransactionImporter, to_pocketsmith_transaction
from finsync.sync.windows import sort_newest_first

from tests.fixtures.synthetic_data import make_frollo_transaction


def _daily(count: int, newest: date = date(2024, 6, 30), first_id: int = 1) -> list:
    """count transactions on consecutive days, newest first."""
    txns = [make_frollo_transaction(first_id + i, newest - timedelta(days=count - 1 - i)) for i in range(count)]
    return sort_newest_first(txns)


@pytest.fixture
def account(ledger):
    return ledger.seed_account("Everyday")


def _seed_existing(ledger, account, transactions) -> None:
    for txn in transactions:
        ledger.seed_transaction(account.transaction_account_id, to_pocketsmith_transaction(txn))


@pytest.mark.sync
class TestTransactionMapping:
    """Test Frollo → PocketSmith field mapping."""

    def test_fields(self):
        txn = make_frollo_transaction(
            42, date(2024, 3, 5), amount="-12.50", payee="Sample Coffee Shop", reference="REF42"
        )

        mapped = to_pocketsmith_transaction(txn)

        assert mapped.payee == "SAMPLE COFFEE SHOP"
        assert mapped.amount == Money.from_cents(-1250)
        assert mapped.date == FinancialDate(date=date(2024, 3, 5))
        assert mapped.memo == "REF42"
        assert mapped.is_transfer is False
        assert mapped.id is None

    @pytest.mark.parametrize(
        "transaction_type,expected", [("internal_transfer", True), ("purchase", False)]
    )
    def test_transfer_flag(self, transaction_type, expected):
        txn = make_frollo_transaction(1, date(2024, 3, 5), transaction_type=transaction_type)
        assert to_pocketsmith_transaction(txn).is_transfer is expected

    @pytest.mark.currency
    def test_malformed_amount(self):
        txn = make_frollo_transaction(1, date(2024, 3, 5), amount="12,50")

        with pytest.raises(AmountParseError):
            to_pocketsmith_transaction(txn)


@pytest.mark.sync
class TestImportTransactions:
    """Test import behaviour and the convergence cut-off."""

    def test_imports_everything_into_empty_account(self, ledger, account):
        txns = _daily(5)

        result = TransactionImporter(ledger).import_transactions(account.transaction_account_id, txns)

        assert result.imported == 5
        assert result.already_present == 0
        assert not result.converged
        assert [t.memo for t in ledger.transactions_for("Everyday")] == [t.reference for t in txns]

    def test_stops_after_more_than_threshold_matches(self, ledger, account):
        """Eleven already-present transactions end the pass; the twelfth is never looked up."""
        txns = _daily(12)
        _seed_existing(ledger, account, txns[:11])

        result = TransactionImporter(ledger, match_threshold=10).import_transactions(
            account.transaction_account_id, txns
        )

        assert result.converged
        assert result.examined == 11
        assert result.already_present == 11
        assert result.imported == 0
        assert ledger.calls["search_transactions_by_memo"] == 11
        assert ledger.calls["add_transaction"] == 0

    def test_exactly_threshold_matches_keeps_going(self, ledger, account):
        txns = _daily(11)
        _seed_existing(ledger, account, txns[:10])

        result = TransactionImporter(ledger, match_threshold=10).import_transactions(
            account.transaction_account_id, txns
        )

        assert not result.converged
        assert result.imported == 1
        assert ledger.transactions_for("Everyday")[-1].memo == txns[10].reference

    def test_new_transaction_resets_the_count(self, ledger, account):
        txns = _daily(20)
        present = txns[:8] + txns[9:17]
        _seed_existing(ledger, account, present)

        result = TransactionImporter(ledger, match_threshold=10).import_transactions(
            account.transaction_account_id, txns
        )

        # 8 present, 1 new, 8 present, then the last three are new again
        assert result.imported == 4
        assert result.already_present == 16
        assert not result.converged

    def test_zero_threshold(self, ledger, account):
        txns = _daily(3)
        _seed_existing(ledger, account, txns[:1])

        result = TransactionImporter(ledger, match_threshold=0).import_transactions(
            account.transaction_account_id, txns
        )

        assert result.converged
        assert result.examined == 1

    def test_second_run_is_idempotent(self, ledger, account):
        txns = _daily(30)
        importer = TransactionImporter(ledger)

        importer.import_transactions(account.transaction_account_id, txns)
        adds_after_first = ledger.calls["add_transaction"]
        second = importer.import_transactions(account.transaction_account_id, txns)

        assert second.imported == 0
        assert second.converged
        assert ledger.calls["add_transaction"] == adds_after_first
        assert len(ledger.transactions_for("Everyday")) == 30

    def test_search_failure_skips_transaction(self, ledger, account, caplog):
        txns = _daily(3)
        ledger.failing_search_memos.add(txns[1].reference)

        result = TransactionImporter(ledger).import_transactions(
            account.transaction_account_id, txns, account_name="Everyday"
        )

        assert result.search_failures == 1
        assert result.imported == 2
        assert txns[1].reference not in [t.memo for t in ledger.transactions_for("Everyday")]
        assert "error searching for transaction" in caplog.text

    def test_search_failure_does_not_count_as_match(self, ledger, account):
        txns = _daily(4)
        _seed_existing(ledger, account, [txns[0], txns[2]])
        ledger.failing_search_memos.add(txns[1].reference)

        result = TransactionImporter(ledger, match_threshold=1).import_transactions(
            account.transaction_account_id, txns
        )

        # two matches separated by a failed search are still consecutive, so 2 > 1 stops the pass
        assert result.converged
        assert result.examined == 3

    def test_add_failure_continues(self, ledger, account, caplog):
        txns = _daily(3)
        ledger.failing_add_memos.add(txns[0].reference)

        result = TransactionImporter(ledger).import_transactions(
            account.transaction_account_id, txns, account_name="Everyday"
        )

        assert result.add_failures == 1
        assert result.imported == 2
        assert result.failed == 1
        assert "error adding transaction" in caplog.text

    def test_same_day_transactions_without_reference(self, ledger, account):
        day = date(2024, 6, 30)
        txns = [
            make_frollo_transaction(1, day, reference="", amount="-4.50"),
            make_frollo_transaction(2, day, reference="", amount="-12.00"),
            make_frollo_transaction(3, day, reference="", amount="-4.50"),
        ]

        result = TransactionImporter(ledger).import_transactions(account.transaction_account_id, txns)

        # distinct amounts are told apart; an identical amount on the same day is not
        assert result.imported == 2
        assert result.already_present == 1
        assert sorted(t.amount.to_cents() for t in ledger.transactions_for("Everyday")) == [-1200, -450]

    def test_rejected_key_during_search_aborts(self, ledger, account):
        ledger.search_error = UnauthorizedError("token revoked", service="pocketsmith", status_code=401)

        with pytest.raises(UnauthorizedError):
            TransactionImporter(ledger).import_transactions(account.transaction_account_id, _daily(3))
        assert ledger.calls["search_transactions_by_memo"] == 1

    def test_rejected_key_during_add_aborts(self, ledger, account):
        ledger.add_error = UnauthorizedError("token revoked", service="pocketsmith", status_code=403)

        with pytest.raises(UnauthorizedError):
            TransactionImporter(ledger).import_transactions(account.transaction_account_id, _daily(3))
        assert ledger.calls["add_transaction"] == 1

    def test_malformed_amount_aborts(self, ledger, account):
        txns = _daily(2) + [make_frollo_transaction(99, date(2020, 1, 1), amount="N/A")]

        with pytest.raises(AmountParseError):
            TransactionImporter(ledger).import_transactions(account.transaction_account_id, txns)

    def test_empty_list(self, ledger, account):
        result = TransactionImporter(ledger).import_transactions(account.transaction_account_id, [])
        assert result == ImportResult()


@pytest.mark.sync
class TestImportResult:
    """Test ImportResult serialization."""

    def test_to_dict(self):
        result = ImportResult(examined=5, imported=3, already_present=1, search_failures=1)

        assert result.to_dict() == {
            "examined": 5,
            "imported": 3,
            "already_present": 1,
            "search_failures": 1,
            "add_failures": 0,
            "converged": False,
        }
