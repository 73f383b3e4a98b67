#!/usr/bin/env python3
"""
Sync CLI - Frollo → PocketSmith Sync Commands

Command-line interface for running the sync and inspecting Frollo accounts.
"""

import click

from ..core.config import Config, get_config
from ..core.currency import format_cents
from ..core.errors import AmountParseError, GatewayError, UnauthorizedError
from ..core.json_utils import write_json
from ..frollo import FrolloBalance, FrolloClient
from ..pocketsmith import DryRunPocketsmithClient, PocketsmithClient
from ..sync import AccountResolver, SyncEngine, SyncReport


def _login(client: FrolloClient, config: Config) -> None:
    try:
        client.login(config.frollo.username, config.frollo.password)
    except GatewayError as e:
        raise click.ClickException(f"Frollo login failed: {e}") from e


def _format_balance(balance: FrolloBalance) -> str:
    try:
        return format_cents(balance.to_money().to_cents(), balance.currency)
    except AmountParseError:
        return f"{balance.amount!r} {balance.currency}"


def _echo_report(report: SyncReport, verbose: bool) -> None:
    click.echo()
    click.echo("Sync Summary:")
    for account in report.accounts:
        name = account.account_name or account.account_id
        line = f"  [{account.status.value}] {name}"
        if account.import_result:
            line += f": {account.import_result.imported} imported, {account.import_result.already_present} present"
            if account.import_result.failed:
                line += f", {account.import_result.failed} failed"
        if account.balance_result and account.balance_result.updated:
            line += f", balance → {account.balance_result.target}"
        if account.reason:
            line += f" ({account.reason})"
        click.echo(line)

        if verbose and account.created_institution:
            click.echo("      created PocketSmith institution")
        if verbose and account.created_account:
            click.echo("      created PocketSmith account")
        if verbose and account.balance_result and account.balance_result.error:
            click.echo(f"      balance not reconciled: {account.balance_result.error}")

    click.echo(
        f"Synced {report.synced}, skipped {report.skipped}, failed {report.failed}; "
        f"{report.total_imported} transactions imported"
    )


@click.command()
@click.option("--username", help="Frollo username (default: FROLLO_USERNAME)")
@click.option("--password", help="Frollo password (default: FROLLO_PASSWORD)")
@click.option("--token", help="PocketSmith developer key (default: POCKETSMITH_TOKEN)")
@click.option("--accounts", help="Comma-separated Frollo account IDs (default: ACCOUNTS_TO_SYNC)")
@click.option("--dry-run", is_flag=True, help="Read from both services but do not write to PocketSmith")
@click.option(
    "--continue-on-error",
    is_flag=True,
    default=None,
    help="Record an account as failed and move on instead of aborting the run",
)
@click.option("--no-report", is_flag=True, help="Do not write a JSON run report")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def sync(
    ctx: click.Context,
    username: str | None,
    password: str | None,
    token: str | None,
    accounts: str | None,
    dry_run: bool,
    continue_on_error: bool | None,
    no_report: bool,
    verbose: bool,
) -> None:
    """
    Sync Frollo transactions and balances into PocketSmith.

    Examples:
      finsync sync --accounts 1234,5678
      finsync sync --accounts 1234 --dry-run -v
    """
    config = get_config().with_overrides(
        username=username,
        password=password,
        token=token,
        accounts=accounts,
        continue_on_error=continue_on_error,
    )
    verbose = verbose or bool(ctx.obj and ctx.obj.get("verbose", False))

    missing = config.missing_required()
    if missing:
        raise click.ClickException("Missing required settings: " + "; ".join(missing))

    if verbose:
        click.echo("Frollo → PocketSmith Sync")
        click.echo(f"Accounts: {', '.join(config.sync.account_ids)}")
        click.echo(f"Mode: {'Dry run' if dry_run else 'Live'}")
        click.echo()

    source = FrolloClient(config.frollo)
    ledger_class = DryRunPocketsmithClient if dry_run else PocketsmithClient
    ledger = ledger_class(config.pocketsmith)

    try:
        _login(source, config)

        engine = SyncEngine(
            source,
            ledger,
            match_threshold=config.sync.match_threshold,
            window_months=config.sync.window_months,
            step_months=config.sync.step_months,
            continue_on_error=config.sync.continue_on_error,
        )
        report = engine.run(config.sync.account_ids, dry_run=dry_run)
    except UnauthorizedError as e:
        raise click.ClickException(f"Authentication failed: {e}") from e
    except AmountParseError as e:
        raise click.ClickException(f"Malformed amount from Frollo, sync aborted: {e}") from e
    except (GatewayError, ValueError) as e:
        raise click.ClickException(f"Sync aborted: {e}") from e
    finally:
        source.close()
        ledger.close()

    _echo_report(report, verbose)

    if dry_run:
        click.echo(f"Dry run: {len(ledger.planned_writes)} PocketSmith writes skipped")
        if verbose:
            for planned in ledger.planned_writes:
                click.echo(f"  {planned}")

    if not no_report:
        timestamp = report.started_at.strftime("%Y-%m-%d_%H-%M-%S")
        suffix = "_dry_run" if dry_run else ""
        report_file = config.reports_dir / f"{timestamp}_sync_report{suffix}.json"
        write_json(report_file, report.to_dict())
        click.echo(f"Report saved to: {report_file}")

    if report.failed:
        ctx.exit(1)


@click.command()
@click.option("--username", help="Frollo username (default: FROLLO_USERNAME)")
@click.option("--password", help="Frollo password (default: FROLLO_PASSWORD)")
def accounts(username: str | None, password: str | None) -> None:
    """
    List Frollo accounts and whether each can be synced.

    Useful for finding the IDs to put in ACCOUNTS_TO_SYNC.
    """
    config = get_config().with_overrides(username=username, password=password)
    if not config.frollo.username or not config.frollo.password:
        raise click.ClickException("Frollo username and password are required")

    source = FrolloClient(config.frollo)
    try:
        _login(source, config)
        frollo_accounts = source.get_accounts()
    except GatewayError as e:
        raise click.ClickException(f"Failed to list Frollo accounts: {e}") from e
    finally:
        source.close()

    if not frollo_accounts:
        click.echo("No Frollo accounts found")
        return

    click.echo("Frollo accounts:")
    for account in frollo_accounts:
        eligible, reason = AccountResolver.is_eligible(account)
        marker = "sync" if eligible else "skip"
        line = f"  {account.id:>8}  [{marker}] {account.name} ({account.provider.name})"
        line += f"  {account.status}/{account.account_type}"
        line += f"  {_format_balance(account.current_balance)}"
        if reason:
            line += f"  - {reason}"
        click.echo(line)
