from typing import List, Sequence

from tabulate import tabulate

from .cluster import SkippedService
from .service import ServiceRecord

# Minimum column widths; longer values widen the column instead of
# shifting the rest of the row.
COLUMNS = [
    ("Name", 30),
    ("vCPU", 10),
    ("RAM (GB)", 10),
    ("Status", 10),
    ("Count", 7),
    ("Version", 10),
    ("Created", 10),
]


def _cells(record: ServiceRecord) -> List[str]:
    cells = record.as_row()
    cells[1] = f"{record.vcpu:g}"
    cells[2] = f"{record.ram_gb:g}"
    return [str(cell) for cell in cells]


def services_table(records: Sequence[ServiceRecord]) -> str:
    return tabulate(
        [_cells(record) for record in records],
        headers=[title.ljust(width) for title, width in COLUMNS],
        tablefmt="plain",
        colalign=["left"] * len(COLUMNS),
        disable_numparse=True,
    )


def inventory_report(cluster_name: str, records: Sequence[ServiceRecord]) -> str:
    return (
        f"{len(records)} services found in cluster {cluster_name}:\n"
        f"{services_table(records)}"
    )


def skipped_report(skipped: Sequence[SkippedService]) -> str:
    lines = [f"{len(skipped)} services could not be fully resolved:"]
    lines.extend(f"  {s.identifier} ({s.stage}): {s.reason}" for s in skipped)
    return "\n".join(lines)
