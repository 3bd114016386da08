"""Console report rendering with rich markup."""
from __future__ import annotations

import math
from datetime import datetime

from rich.console import Console

from ..models import AlertLevel, UserSummary
from .alerts import evaluate, format_health_factor, format_usd

# Display bands; wider than the alerting thresholds on purpose.
HEALTHY_DISPLAY_BOUNDARY = 2.0
LIQUIDATION_DISPLAY_BOUNDARY = 1.0

_RULE = "━" * 40


def health_factor_color(health_factor: float) -> str:
    if health_factor >= HEALTHY_DISPLAY_BOUNDARY:
        return "green"
    if health_factor >= LIQUIDATION_DISPLAY_BOUNDARY:
        return "yellow"
    return "red"


def colorize_health_factor(health_factor: float, decimals: int = 3) -> str:
    color = health_factor_color(health_factor)
    return f"[{color}]{format_health_factor(health_factor, decimals)}[/{color}]"


def render_report(
    account_address: str,
    summary: UserSummary,
    caution_threshold: float,
    now: datetime | None = None,
) -> list[str]:
    """Return the report as rich-markup lines, fields in fixed order."""
    now = now or datetime.now()
    lines = [
        "[blue]\n🔍 Aave Health Monitor[/blue]",
        f"[bright_black]Last updated: {now:%Y-%m-%d %H:%M:%S}\n[/bright_black]",
        f"[bright_black]Monitoring address: {account_address}\n[/bright_black]",
        "[bold]📊 Position Summary[/bold]",
        f"[bright_black]{_RULE}[/bright_black]",
        f"[bold]Total Collateral:[/bold] {format_usd(summary.total_collateral_usd)}",
        f"[bold]Total Borrowed:  [/bold] {format_usd(summary.total_borrows_usd)}",
        f"[bold]Liquidation Threshold:[/bold] "
        f"{summary.current_liquidation_threshold * 100:.2f}%",
        f"[bold]Health Factor:    [/bold] {colorize_health_factor(summary.health_factor)}",
        f"[bright_black]{_RULE}\n[/bright_black]",
    ]

    level = evaluate(summary.health_factor, caution_threshold)
    if level is AlertLevel.CRITICAL:
        lines.append("[red]⚠️  WARNING: Your position is at risk of liquidation![/red]")
        lines.append(
            "[yellow]Consider adding more collateral or reducing your "
            "borrowed amount.\n[/yellow]"
        )
    elif level is AlertLevel.CAUTION:
        lines.append(
            f"[yellow]⚠️  Caution: Your health factor is below {caution_threshold}[/yellow]"
        )
        lines.append(
            "[yellow]Consider adding more collateral to improve your "
            "position's safety.\n[/yellow]"
        )
    elif math.isinf(summary.health_factor):
        lines.append("[bright_black]No outstanding debt.\n[/bright_black]")
    return lines


def print_report(console: Console, lines: list[str], clear: bool = True) -> None:
    if clear:
        console.clear()
    for line in lines:
        console.print(line, highlight=False)
