#!/usr/bin/env python3
"""BizTime CLI for day-to-day bookkeeping."""

import argparse
from datetime import date

import questionary
from rich.console import Console
from rich.table import Table

from biztime.access import DataAccess
from biztime.company import CompanyRepository
from biztime.db import Database
from biztime.invoice import InvoiceRepository

console = Console()


def list_companies(access: DataAccess) -> None:
    """Print every company."""
    result = CompanyRepository(access).list()
    if not result.success:
        console.print(f"[red]{result.error.message}[/]")
        return
    if not result.payload:
        console.print("[red]No companies found.[/]")
        return

    table = Table("code", "name")
    for row in result.payload:
        table.add_row(row["code"], row["name"])
    console.print(table)


def list_invoices(access: DataAccess) -> None:
    """Print every invoice."""
    result = InvoiceRepository(access).list()
    if not result.success:
        console.print(f"[red]{result.error.message}[/]")
        return
    if not result.payload:
        console.print("[red]No invoices found.[/]")
        return

    table = Table("id", "company")
    for row in result.payload:
        table.add_row(str(row["id"]), row["comp_code"])
    console.print(table)


def pay_invoice(access: DataAccess) -> None:
    """Select an unpaid invoice and mark it paid today."""
    invoice_repo = InvoiceRepository(access)
    unpaid = invoice_repo.list_unpaid()
    if not unpaid.success:
        console.print(f"[red]{unpaid.error.message}[/]")
        return
    if not unpaid.payload:
        console.print("[green]No unpaid invoices.[/]")
        return

    selected = questionary.select(
        "Select an invoice:",
        choices=[
            questionary.Choice(
                title=f"#{r['id']} {r['comp_code']} {r['amt']:.2f} (added {r['add_date']})",
                value=r,
            )
            for r in unpaid.payload
        ],
    ).ask()

    # User pressed Ctrl+C or Escape
    if selected is None:
        console.print("[dim]Cancelled.[/]")
        return

    today = date.today()
    console.print(f"[yellow]Will mark invoice [bold]#{selected['id']}[/] paid on {today}.[/]")
    if not questionary.confirm("Proceed with these changes?").ask():
        console.print("[dim]Cancelled.[/]")
        return

    result = invoice_repo.pay(selected["id"], paid_on=today)
    if result.success:
        console.print(f"[green]Invoice #{selected['id']} marked paid.[/]")
    else:
        console.print(f"[red]{result.error.message}[/]")


COMMANDS = {
    "list-companies": list_companies,
    "list-invoices": list_invoices,
    "pay-invoice": pay_invoice,
}


def main():
    parser = argparse.ArgumentParser(description="BizTime CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-companies", help="List companies")
    subparsers.add_parser("list-invoices", help="List invoices")
    subparsers.add_parser("pay-invoice", help="Mark an unpaid invoice as paid")

    args = parser.parse_args()

    database = Database.from_config()
    database.open(wait=True)
    try:
        COMMANDS[args.command](DataAccess(database))
    finally:
        database.close()


if __name__ == "__main__":
    main()
