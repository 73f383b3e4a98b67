#!/usr/bin/env python3
"""
Account Resolution

Maps a Frollo account onto a PocketSmith account before any transactions
are imported, creating the PocketSmith institution and account the first
time an account name is seen.

Name equality is the only link between the two ledgers: the PocketSmith
account title must equal the Frollo account name, and the institution
title must equal the Frollo provider name. Nothing is persisted locally.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..core.errors import NotFoundError
from ..frollo.models import FrolloAccount
from ..pocketsmith.models import ACCOUNT_TYPE_BANK, PocketsmithAccount

if TYPE_CHECKING:
    from ..pocketsmith.client import PocketsmithClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one Frollo account."""

    account: PocketsmithAccount
    created_account: bool = False
    created_institution: bool = False


class AccountResolver:
    """Find-or-create PocketSmith accounts for Frollo accounts."""

    def __init__(self, ledger: "PocketsmithClient", account_kind: str = ACCOUNT_TYPE_BANK):
        self.ledger = ledger
        self.account_kind = account_kind

    @staticmethod
    def is_eligible(account: FrolloAccount) -> tuple[bool, str | None]:
        """
        Check whether an account should be synced at all.

        Returns:
            (eligible, reason) where reason explains a skip
        """
        if not account.is_active:
            return False, f"only active accounts are synced (status {account.status})"
        if not account.is_supported_type:
            return False, f"only bank accounts are currently supported (type {account.account_type})"
        return True, None

    def resolve(self, user_id: int, source_account: FrolloAccount) -> Resolution:
        """
        Return the PocketSmith account for a Frollo account.

        Policy, in order:
        1. account with the same title → use it
        2. otherwise institution with the provider's name → use it
        3. otherwise create that institution in the lower-cased primary currency
        4. create the account under the institution, same currency, kind "bank"

        Raises:
            GatewayError: Any failure other than a lookup miss
        """
        try:
            account = self.ledger.find_account_by_name(user_id, source_account.name)
            logger.debug(f"Found PocketSmith account '{account.title}' (id {account.id})")
            return Resolution(account=account)
        except NotFoundError:
            logger.info(f"No PocketSmith account named '{source_account.name}', creating it")

        currency = source_account.currency
        provider_name = source_account.provider.name
        created_institution = False

        try:
            institution = self.ledger.find_institution_by_name(user_id, provider_name)
        except NotFoundError:
            institution = self.ledger.create_institution(user_id, provider_name, currency)
            created_institution = True
            logger.info(f"Created institution '{institution.title}' with ID {institution.id}")

        account = self.ledger.create_account(
            user_id, institution.id, source_account.name, currency, self.account_kind
        )
        logger.info(f"Created account '{account.title}' with ID {account.id} under '{institution.title}'")

        return Resolution(account=account, created_account=True, created_institution=created_institution)
