"""Console output for boscora-lib."""

from rich.console import Console
from rich.table import Table

from boscora_lib.summary import ParcelSummary

console = Console()


def summary_table(summary: ParcelSummary) -> Table:
    """Build a rich table describing a parcel set."""
    table = Table(title="Parcel grid")

    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")

    table.add_row("Parcels", str(summary.parcel_count))
    table.add_row("Donated", str(summary.donated_count))
    table.add_row("Available", str(summary.available_count))
    table.add_row("Available value", f"{summary.available_value:g}")
    if summary.cell_side_km is not None:
        table.add_row("Cell side (km)", f"{summary.cell_side_km:.4f}")
        table.add_row("Refinement attempts", str(summary.refinement_attempts))
        table.add_row("Target reached", "yes" if summary.target_reached else "no")

    return table


def display_summary(summary: ParcelSummary) -> None:
    """Display a parcel summary using rich formatting."""
    console.print(summary_table(summary))
