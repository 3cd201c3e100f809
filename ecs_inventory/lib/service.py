from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

CPU_UNITS_PER_VCPU = 1024
MIB_PER_GIB = 1024


def units_to_whole(raw: Any, per_unit: int = 1024) -> float:
    """Convert a raw ECS allocation string such as "2048" into whole units.

    Task definitions report cpu in 1/1024 vCPU units and memory in MiB, both
    as strings. Anything missing or unparseable counts as 0.0.
    """
    try:
        return float(raw) / per_unit
    except (TypeError, ValueError):
        return 0.0


def format_created_at(created_at: Optional[Union[datetime, int, float]]) -> str:
    if created_at is None:
        return "n/a"
    if isinstance(created_at, datetime):
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        value = created_at.astimezone(timezone.utc)
    else:
        value = datetime.fromtimestamp(int(created_at), tz=timezone.utc)
    return value.replace(microsecond=0).isoformat()


@dataclass(frozen=True)
class ServiceRecord:
    name: str
    vcpu: float = 0.0
    ram_gb: float = 0.0
    status: str = ""
    running_count: int = 0
    platform_version: str = ""
    created_at: str = "n/a"

    @classmethod
    def from_description(
        cls,
        ecs_service: Mapping[str, Any],
        task_definition: Mapping[str, Any],
    ) -> "ServiceRecord":
        return cls(
            name=ecs_service.get("serviceName") or "",
            vcpu=units_to_whole(task_definition.get("cpu"), CPU_UNITS_PER_VCPU),
            ram_gb=units_to_whole(task_definition.get("memory"), MIB_PER_GIB),
            status=ecs_service.get("status") or "",
            running_count=ecs_service.get("runningCount") or 0,
            platform_version=ecs_service.get("platformVersion") or "",
            created_at=format_created_at(ecs_service.get("createdAt")),
        )

    def as_row(self) -> list:
        return [
            self.name,
            self.vcpu,
            self.ram_gb,
            self.status,
            self.running_count,
            self.platform_version,
            self.created_at,
        ]
