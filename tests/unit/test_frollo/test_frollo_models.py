#!/usr/bin/env python3
"""Tests for Frollo domain models."""

from datetime import date

import pytest

from finsync.core.dates import FinancialDate
from finsync.core.errors import AmountParseError
from finsync.core.money import Money
from finsync.frollo.models import FrolloAccount, FrolloBalance, FrolloToken, FrolloTransaction

from tests.fixtures.synthetic_data import frollo_account_dict, frollo_transaction_dict


@pytest.mark.frollo
class TestFrolloAccount:
    """Test FrolloAccount parsing and eligibility properties."""

    def test_from_dict(self):
        account = FrolloAccount.from_dict(frollo_account_dict())

        assert account.id == 1001
        assert account.name == "Everyday"
        assert account.status == "active"
        assert account.account_type == "bank_account"
        assert account.provider.name == "Example Bank"
        assert account.current_balance == FrolloBalance(amount="500.00", currency="AUD")
        assert account.external_id == "ext-1001"

    def test_currency_is_lower_cased_primary(self):
        account = FrolloAccount.from_dict(frollo_account_dict(currency="AUD"))
        assert account.currency == "aud"

    @pytest.mark.parametrize(
        "status,account_type,active,supported",
        [
            ("active", "bank_account", True, True),
            ("active", "savings", True, True),
            ("inactive", "bank_account", False, True),
            ("closed", "bank_account", False, True),
            ("active", "credit_card", True, False),
            ("active", "loan", True, False),
        ],
    )
    def test_eligibility_properties(self, status, account_type, active, supported):
        account = FrolloAccount.from_dict(frollo_account_dict(status=status, account_type=account_type))
        assert account.is_active is active
        assert account.is_supported_type is supported

    def test_missing_optional_sections(self):
        account = FrolloAccount.from_dict({"id": 5, "account_name": "Bare"})

        assert account.provider.name == ""
        assert account.account_type == ""
        assert account.current_balance.amount == ""
        assert not account.is_active


@pytest.mark.frollo
class TestFrolloBalance:
    """Test FrolloBalance amount parsing."""

    @pytest.mark.currency
    def test_to_money(self):
        assert FrolloBalance(amount="500.00", currency="AUD").to_money() == Money.from_cents(50000)

    @pytest.mark.currency
    def test_to_money_malformed(self):
        with pytest.raises(AmountParseError):
            FrolloBalance(amount="five hundred", currency="AUD").to_money()

    @pytest.mark.currency
    def test_missing_amount_is_malformed(self):
        with pytest.raises(AmountParseError):
            FrolloBalance.from_dict(None).to_money()


@pytest.mark.frollo
class TestFrolloTransaction:
    """Test FrolloTransaction parsing and transfer classification."""

    def test_from_dict(self):
        txn = FrolloTransaction.from_dict(
            frollo_transaction_dict(42, date(2024, 3, 5), amount="-12.50", payee="Sample Coffee Shop")
        )

        assert txn.id == 42
        assert txn.account_id == 1001
        assert txn.transaction_date == FinancialDate(date=date(2024, 3, 5))
        assert txn.post_date == FinancialDate(date=date(2024, 3, 6))
        assert txn.amount.to_money() == Money.from_cents(-1250)
        assert txn.description_original == "SAMPLE COFFEE SHOP"
        assert txn.description_simple == "Sample Coffee Shop"
        assert txn.reference == "REF000042"

    def test_missing_reference_is_empty(self):
        data = frollo_transaction_dict(1, date(2024, 3, 5))
        data["reference"] = None
        assert FrolloTransaction.from_dict(data).reference == ""

    @pytest.mark.parametrize(
        "transaction_type,expected",
        [
            ("internal_transfer", True),
            ("transfer", True),
            ("external_transfer_out", True),
            ("purchase", False),
            ("Transfer", False),
            ("", False),
        ],
    )
    def test_is_transfer(self, transaction_type, expected):
        txn = FrolloTransaction.from_dict(
            frollo_transaction_dict(1, date(2024, 3, 5), transaction_type=transaction_type)
        )
        assert txn.is_transfer is expected


@pytest.mark.frollo
class TestFrolloToken:
    """Test FrolloToken."""

    def test_repr_hides_token(self):
        token = FrolloToken.from_dict({"access_token": "secret-value", "token_type": "Bearer", "expires_in": 1800})

        assert token.access_token == "secret-value"
        assert "secret-value" not in repr(token)
