#!/usr/bin/env python3

import sys

from botocore.exceptions import BotoCoreError, ClientError
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from ecs_inventory.lib.cluster import Cluster
from ecs_inventory.lib.config import Settings
from ecs_inventory.lib.log import configure_logging
from ecs_inventory.lib.report import inventory_report, skipped_report


def _progress() -> Progress:
    return Progress(
        SpinnerColumn(style="green"),
        TimeElapsedColumn(),
        BarColumn(bar_width=60, style="blue", complete_style="cyan"),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        transient=True,
    )


def run(settings: Settings, ecs=None) -> int:
    cluster = Cluster(
        name=settings.cluster,
        region=settings.region,
        page_size=settings.page_size,
        max_workers=settings.max_workers,
        ecs=ecs,
    )

    print("Fetching services...")
    try:
        service_arns = cluster.service_arns
    except (BotoCoreError, ClientError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if len(service_arns) == 0:
        print("No services found!")
        return 0

    with _progress() as progress:
        task = progress.add_task("services", total=len(service_arns))
        cluster.on_service = lambda record: progress.advance(task)
        services = cluster.services

    print(inventory_report(cluster.name, services))

    if cluster.skipped:
        print(skipped_report(cluster.skipped), file=sys.stderr)

    return 0


def main():
    try:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    sys.exit(run(settings))


if __name__ == "__main__":
    main()
