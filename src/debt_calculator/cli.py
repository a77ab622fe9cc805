"""Interactive CLI — click entry point + interactive update loop.

Session startup:
  1. Parse any values given on the command line (defaults fill the rest).
  2. Show the assessment.
  3. Enter the interactive update loop (unless --once).

Update loop:
  - Let the user update any field, reset to the defaults, show the repayment
    schedule or tips, look up a reference rate online, or exit.
  - Every change recomputes from a fresh DebtInput snapshot.
"""
from __future__ import annotations

import logging
import sys
from decimal import Decimal
from typing import Optional

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .calculator import AffordabilityResult, build_repayment_schedule, compute, compute_repayment_totals, summarize_by_year
from .config import DEBT_TIPS, DISCLAIMER, REFERENCE_RATE_ADD_ON, STATUS_COLORS
from .fetcher import FetchError, fetch_reference_rate
from .inputs import FIELD_LABELS, InputError, UserInputs, check_ranges, update_field

console = Console()
err_console = Console(stderr=True, style="bold red")

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────────────────
# Formatting helpers
# ──────────────────────────────────────────────────────────────────────────────

def _fmt_money(value: Decimal) -> str:
    return f"${value:,.0f}"


def _fmt_cents(value: Decimal) -> str:
    return f"${value:,.2f}"


def _fmt_pct(value: Decimal) -> str:
    return f"{value:.1f}%"


def _fmt_ratio(value: Decimal) -> str:
    return f"{value:.2f}"


# ──────────────────────────────────────────────────────────────────────────────
# Result display
# ──────────────────────────────────────────────────────────────────────────────

def display_result(result: AffordabilityResult) -> None:
    color = STATUS_COLORS[result.affordability_status]

    console.print()
    console.print(Panel(
        f"[bold]Debt-to-Income Ratio[/bold]\n"
        f"[bold cyan]{_fmt_ratio(result.debt_to_income_ratio)}[/bold cyan]\n"
        f"[dim]debt relative to annual salary[/dim]\n\n"
        f"Monthly Payment: [bold]{_fmt_money(result.monthly_payment)}[/bold]    "
        f"Affordability: [bold {color}]{result.affordability_status}[/bold {color}]",
        title="Results",
        expand=False,
    ))

    t = Table(title="Debt Analysis", box=box.SIMPLE, show_header=False, padding=(0, 2))
    t.add_column("Field", style="cyan")
    t.add_column("Value", justify="right")
    t.add_row("Total Student Debt", _fmt_money(result.total_debt))
    t.add_row("Annual Salary", _fmt_money(result.annual_salary))
    t.add_row("[bold]Payment % of Income[/bold]", f"[bold]{_fmt_pct(result.payment_to_income_ratio)}[/bold]")
    console.print(t)


def display_tips() -> None:
    console.print("[bold]Key Considerations[/bold]")
    for tip in DEBT_TIPS:
        console.print(f"  • {tip}")
    console.print()
    console.print(f"[dim]{DISCLAIMER}[/dim]")


def display_schedule(inputs: UserInputs) -> None:
    debt_input = inputs.to_debt_input()
    schedule = build_repayment_schedule(debt_input)
    if not schedule:
        err_console.print("No repayment schedule: the repayment term is 0 years.")
        return

    t = Table(title="Repayment Schedule (by year)", box=box.MINIMAL_HEAVY_HEAD)
    for col in ("Year", "Paid", "Principal", "Interest", "Closing Bal."):
        t.add_column(col, justify="right")

    for year in summarize_by_year(schedule):
        t.add_row(
            str(year.year),
            _fmt_cents(year.total_paid),
            _fmt_cents(year.principal_paid),
            _fmt_cents(year.interest_paid),
            _fmt_cents(year.closing_balance),
        )
    console.print(t)

    totals = compute_repayment_totals(debt_input)
    console.print(
        f"  {totals.number_of_payments} payments of {_fmt_cents(totals.monthly_payment)} · "
        f"total repaid [bold]{_fmt_cents(totals.total_repaid)}[/bold] · "
        f"total interest [bold]{_fmt_cents(totals.total_interest)}[/bold]"
    )


def display_inputs(inputs: UserInputs) -> None:
    console.print(
        f"[dim]Debt {_fmt_money(inputs.total_debt)} · Salary {_fmt_money(inputs.annual_salary)} · "
        f"Rate {inputs.interest_rate}% · Term {inputs.repayment_term} years[/dim]"
    )


def display_warnings(inputs: UserInputs) -> None:
    for warning in check_ranges(inputs):
        console.print(f"[yellow]{escape(warning)}[/yellow]")


# ──────────────────────────────────────────────────────────────────────────────
# Calculation runner
# ──────────────────────────────────────────────────────────────────────────────

def run_calculation(inputs: UserInputs) -> AffordabilityResult:
    """Recompute from a fresh snapshot of *inputs* and display the result."""
    display_inputs(inputs)
    display_warnings(inputs)
    result = compute(inputs.to_debt_input())
    display_result(result)
    return result


# ──────────────────────────────────────────────────────────────────────────────
# Interactive update loop
# ──────────────────────────────────────────────────────────────────────────────

_PROMPTS: dict[str, str] = {
    "total_debt": "Total student loan debt ($):",
    "annual_salary": "Annual salary ($):",
    "interest_rate": "Interest rate (%):",
    "repayment_term": "Repayment term (years):",
}


def _prompt_field(inputs: UserInputs, field: str) -> None:
    while True:
        raw = console.input(f"[bold]{_PROMPTS[field]}[/bold] ")
        try:
            update_field(inputs, field, raw)
            return
        except InputError as exc:
            err_console.print(f"  {escape(str(exc))}")


def _lookup_rate(inputs: UserInputs) -> None:
    loan_types = sorted(REFERENCE_RATE_ADD_ON)
    raw = console.input(
        f"[bold]Loan type ({' / '.join(loan_types)}, default undergraduate): [/bold]"
    ).strip().lower() or "undergraduate"
    if raw not in REFERENCE_RATE_ADD_ON:
        err_console.print(f"  Unknown loan type '{escape(raw)}'.")
        return

    console.print(f"  Fetching the latest reference rate for {raw} loans…")
    try:
        rate = fetch_reference_rate(raw)  # type: ignore[arg-type]
    except FetchError as exc:
        err_console.print(f"  Fetch failed: {escape(str(exc))}")
        return

    console.print(f"  Reference rate: [bold]{rate}%[/bold] (current: {inputs.interest_rate}%)")
    confirm = console.input("[bold]Use this rate? (y/n): [/bold]").strip().lower()
    if confirm == "y":
        logger.info("Applying reference rate %s%% (%s)", rate, raw)
        inputs.interest_rate = rate
        run_calculation(inputs)
    else:
        console.print("  Keeping current value.")


def interactive_loop(inputs: UserInputs, show_schedule: bool = False) -> None:
    run_calculation(inputs)
    if show_schedule:
        display_schedule(inputs)

    while True:
        console.print()
        console.print(
            "[bold]Actions:[/bold] "
            "[cyan]update[/cyan] · [cyan]reset[/cyan] · [cyan]schedule[/cyan] · "
            "[cyan]tips[/cyan] · [cyan]rate[/cyan] · [cyan]exit[/cyan]"
        )
        action = console.input("[bold]> [/bold]").strip().lower()

        if action in ("exit", "quit", "q"):
            console.print("Goodbye.")
            break

        elif action == "update":
            console.print(f"  Fields: {', '.join(FIELD_LABELS)}")
            field = console.input("[bold]Field to update: [/bold]").strip().lower()
            if field not in FIELD_LABELS:
                err_console.print(f"  Unknown field '{escape(field)}'.")
                continue
            try:
                _prompt_field(inputs, field)
            except (KeyboardInterrupt, EOFError):
                console.print("\n  Update cancelled.")
                continue
            run_calculation(inputs)

        elif action == "reset":
            inputs.reset()
            run_calculation(inputs)

        elif action == "schedule":
            display_schedule(inputs)

        elif action == "tips":
            display_tips()

        elif action == "rate":
            _lookup_rate(inputs)

        else:
            err_console.print(f"  Unknown action '{escape(action)}'.")


# ──────────────────────────────────────────────────────────────────────────────
# Click entry point
# ──────────────────────────────────────────────────────────────────────────────

def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.command()
@click.option("--debt", type=str, default=None, help="Total student loan debt (default: 45000)")
@click.option("--salary", type=str, default=None, help="Annual gross salary (default: 55000)")
@click.option("--rate", type=str, default=None, help="Annual interest rate in percent (default: 6.5)")
@click.option("--term", type=str, default=None, help="Repayment term in years, e.g. 10 or 10y (default: 10)")
@click.option("--once", is_flag=True, help="Print the assessment once and exit.")
@click.option("--schedule", "show_schedule", is_flag=True, help="Also print the yearly repayment schedule.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(
    debt: Optional[str],
    salary: Optional[str],
    rate: Optional[str],
    term: Optional[str],
    once: bool,
    show_schedule: bool,
    verbose: bool,
) -> None:
    """College debt vs salary calculator."""
    _configure_logging(verbose)
    console.print(Panel("[bold blue]College Debt vs Salary Calculator[/bold blue]", expand=False))

    inputs = UserInputs()
    for option, field, raw in (
        ("debt", "total_debt", debt),
        ("salary", "annual_salary", salary),
        ("rate", "interest_rate", rate),
        ("term", "repayment_term", term),
    ):
        if raw is None:
            continue
        try:
            update_field(inputs, field, raw)
        except InputError as exc:
            err_console.print(f"Invalid value for --{option}: {escape(str(exc))}")
            sys.exit(1)
    logger.debug("Starting session with %s", inputs)

    if once:
        run_calculation(inputs)
        if show_schedule:
            display_schedule(inputs)
        display_tips()
        return

    try:
        interactive_loop(inputs, show_schedule=show_schedule)
    except (KeyboardInterrupt, EOFError):
        console.print("\nSession ended.")
