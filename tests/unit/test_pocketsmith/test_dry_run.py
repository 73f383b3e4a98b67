#!/usr/bin/env python3
"""Tests for the dry-run PocketSmith client."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from finsync.core.config import PocketsmithConfig
from finsync.core.dates import FinancialDate
from finsync.core.errors import NotFoundError
from finsync.core.money import Money
from finsync.pocketsmith.dry_run import DryRunPocketsmithClient
from finsync.pocketsmith.models import PocketsmithTransaction

DAY = FinancialDate(date=date(2024, 3, 5))


def _response(body) -> MagicMock:
    response = MagicMock()
    response.status_code = 200
    response.content = b"[]" if body == [] else b"{}"
    response.json.return_value = body
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return DryRunPocketsmithClient(PocketsmithConfig(api_token="dev-key"), session=session)


@pytest.mark.pocketsmith
class TestDryRunWrites:
    """Writes are planned, never sent."""

    def test_create_institution_and_account(self, client, session):
        institution = client.create_institution(42, "Example Bank", "aud")
        account = client.create_account(42, institution.id, "Everyday", "aud", "bank")

        session.request.assert_not_called()
        assert institution.id < 0
        assert account.id < 0
        assert account.transaction_account_id < 0
        assert account.current_balance == Money.from_cents(0)
        assert len(client.planned_writes) == 2

    def test_planned_records_are_found_again(self, client, session):
        institution = client.create_institution(42, "Example Bank", "aud")
        account = client.create_account(42, institution.id, "Everyday", "aud", "bank")

        assert client.find_institution_by_name(42, "Example Bank") == institution
        assert client.find_account_by_name(42, "Everyday") == account
        session.request.assert_not_called()

    def test_add_transaction(self, client, session):
        txn = PocketsmithTransaction(payee="SHOP", amount=Money.from_cents(-1250), date=DAY, memo="REF1")

        assert client.add_transaction(301, txn) == txn
        session.request.assert_not_called()
        assert "SHOP" in client.planned_writes[0]

    def test_update_transaction_account(self, client, session):
        result = client.update_transaction_account(301, 11, Money.from_cents(50000), DAY)

        assert result.current_balance == Money.from_cents(50000)
        session.request.assert_not_called()
        assert "500.00" in client.planned_writes[0]


@pytest.mark.pocketsmith
class TestDryRunReads:
    """Reads still go to PocketSmith."""

    def test_lookup_falls_through_to_api(self, client, session):
        session.request.return_value = _response([])

        with pytest.raises(NotFoundError):
            client.find_account_by_name(42, "Everyday")
        session.request.assert_called_once()

    def test_search_on_placeholder_account_is_empty(self, client, session):
        assert client.search_transactions_by_memo(-2, DAY, "REF1") == []
        session.request.assert_not_called()

    def test_search_on_real_account_uses_api(self, client, session):
        session.request.return_value = _response([])

        assert client.search_transactions_by_memo(301, DAY, "REF1") == []
        session.request.assert_called_once()
