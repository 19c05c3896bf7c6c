"""
Ledger report CLI

Prints a trial balance or balance sheet built from the ERP's posted entries.
Exit code is 1 when the report is out of balance.

Usage:
    python -m scripts.ledger_report trial-balance --start 2026-01-01 --end 2026-03-31
    python -m scripts.ledger_report balance-sheet --as-of 2026-12-31
"""

import argparse
import asyncio
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from adapters.interfaces import IErpApiClient
from adapters.strapi.rest_client import StrapiApiError, StrapiRestClient
from core.config.loader import LedgerConfig, SettingsLoadError, get_settings
from core.ledger.balance_sheet import BalanceSheetLine, BalanceSheetReport
from core.ledger.trial_balance import TrialBalanceReport
from core.logging import setup_logging
from core.utils.money import format_money
from web.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)

WIDTH = 72


def _row(code: str, name: str, *amounts: str) -> str:
    name_width = WIDTH - 8 - 16 * len(amounts)
    cells = "".join(f"{a:>16}" for a in amounts)
    return f"{code:<8}{name[:name_width]:<{name_width}}{cells}"


def render_trial_balance(report: TrialBalanceReport) -> str:
    """Fixed-width trial balance table"""
    lines = [
        "TRIAL BALANCE",
        report.period.describe(),
        "=" * WIDTH,
        _row("Code", "Account", "Debit", "Credit"),
        "-" * WIDTH,
    ]
    for item in report.items:
        lines.append(_row(item.code, item.name, format_money(item.debit), format_money(item.credit)))
    lines.append("-" * WIDTH)
    lines.append(_row("", "Total", format_money(report.total_debit), format_money(report.total_credit)))
    lines.append("=" * WIDTH)
    lines.extend(_verdict(report.is_balanced, report.difference))
    lines.extend(f"! {w.message}" for w in report.warnings)
    return "\n".join(lines)


def _section(
    title: str,
    rows: list[BalanceSheetLine],
    total_label: str,
    total: Decimal,
) -> list[str]:
    out = [title]
    for row in rows:
        out.append(_row(row.code, row.name, format_money(row.balance)))
    out.append(_row("", total_label, format_money(total)))
    out.append("")
    return out


def render_balance_sheet(report: BalanceSheetReport) -> str:
    """Fixed-width balance sheet"""
    lines = [
        "BALANCE SHEET",
        f"As of {report.as_of_date.isoformat()}",
        "=" * WIDTH,
    ]
    lines += _section("ASSETS", report.assets, "Total Assets", report.total_assets)
    lines += _section("LIABILITIES", report.liabilities, "Total Liabilities", report.total_liabilities)
    lines += _section("EQUITY", report.equity, "Total Equity", report.total_equity)
    lines.append(_row(
        "",
        "Total Liabilities & Equity",
        format_money(report.total_liabilities_and_equity),
    ))
    lines.append("=" * WIDTH)
    lines.extend(_verdict(report.is_balanced, report.difference))
    lines.extend(f"! {w.message}" for w in report.warnings)
    return "\n".join(lines)


def _verdict(is_balanced: bool, difference: Decimal) -> list[str]:
    if is_balanced:
        return ["Balanced"]
    return [f"OUT OF BALANCE (difference {format_money(difference)})"]


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date (expected YYYY-MM-DD): {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ledger_report",
        description="Trial balance / balance sheet from the ERP journal",
    )
    subparsers = parser.add_subparsers(dest="report", required=True)

    trial = subparsers.add_parser("trial-balance", help="Debit/credit totals per account")
    trial.add_argument("--start", type=_parse_date, default=None, help="First date (inclusive)")
    trial.add_argument("--end", type=_parse_date, default=None, help="Last date (inclusive)")

    sheet = subparsers.add_parser("balance-sheet", help="Assets = Liabilities + Equity")
    sheet.add_argument("--as-of", type=_parse_date, default=None, help="Cutoff date (default: today)")

    return parser


async def run(
    args: argparse.Namespace,
    client: IErpApiClient,
    ledger_config: LedgerConfig | None = None,
) -> int:
    """Build and print the requested report

    Returns:
        Exit code (0 balanced, 1 out of balance)
    """
    service = LedgerService(client, ledger_config)

    if args.report == "trial-balance":
        if args.start and args.end and args.start > args.end:
            raise ValueError("--start must not be after --end")
        report = await service.trial_balance(args.start, args.end)
        print(render_trial_balance(report))
    else:
        report = await service.balance_sheet(args.as_of or date.today())
        print(render_balance_sheet(report))

    return 0 if report.is_balanced else 1


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except (SettingsLoadError, ValueError) as e:
        logger.error(f"Settings load failed: {e}")
        return 2

    setup_logging("cli", settings.log_level)

    client = StrapiRestClient.from_config(settings.erp)
    try:
        if not client.api_token and settings.erp.has_credentials:
            await client.login(settings.erp.identifier, settings.erp.password)
        return await run(args, client, settings.ledger)
    except StrapiApiError as e:
        logger.error(f"ERP request failed: {e}")
        return 2
    except ValueError as e:
        logger.error(str(e))
        return 2
    finally:
        await client.close()


def cli() -> None:
    """Console entry point"""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
