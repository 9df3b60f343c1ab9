"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Tables/panels are shared by `probe` and `doctor`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ProbeOutcome, ResolutionReport

_OUTCOME_STYLES = {
    ProbeOutcome.LOAD: "green",
    ProbeOutcome.SAVE: "cyan",
    ProbeOutcome.SKIPPED_NO_VALUE: "dim",
    ProbeOutcome.SKIPPED_EMPTY: "dim",
}


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in JSON/pipeline modes)."""

    title = Text("state-probe", style="bold cyan")
    subtitle = Text("Behavioural load/save discovery • Opaque host types", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_observations_table(report: ResolutionReport) -> Table:
    """One row per probed candidate, in probing order."""

    table = Table(title=f"Probes on {report.base_type}")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Protocol", style="white", no_wrap=True)
    table.add_column("Candidate", style="magenta")
    table.add_column("Outcome")
    for index, observation in enumerate(report.observations, start=1):
        table.add_row(
            str(index),
            observation.variant.value,
            observation.candidate,
            Text(observation.outcome.value, style=_OUTCOME_STYLES[observation.outcome]),
        )
    return table


def build_capabilities_panel(report: ResolutionReport) -> Panel:
    """Panel presenting the resolved load/save pair."""

    body = Text()
    body.append("Load: ", style="bold")
    body.append(f"{report.load_operation}\n", style="green")
    body.append("Save: ", style="bold")
    body.append(f"{report.save_operation}\n", style="cyan")
    body.append(f"\nProtocol: {report.variant.value}", style="dim")
    if report.host_version is not None:
        body.append(f"\nHost version: {report.host_version}", style="dim")

    return Panel(body, title=Text("Resolved capabilities", style="bold yellow"), border_style="yellow")
