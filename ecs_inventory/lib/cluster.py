from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from .service import ServiceRecord

log = structlog.get_logger(__name__)

DESCRIBE_SERVICES = "describe_services"
DESCRIBE_TASK_DEFINITION = "describe_task_definition"


@dataclass(frozen=True)
class SkippedService:
    identifier: str
    stage: str
    reason: str


def chunked(items: Sequence[str], size: int) -> List[List[str]]:
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


@dataclass
class Cluster:
    name: str
    region: str = None
    page_size: int = 10
    list_page_size: int = 100
    max_workers: int = 1
    on_service: Callable[[ServiceRecord], None] = None
    ecs: Any = None
    _service_arns: List[str] = None
    _services: List[ServiceRecord] = None
    _skipped: List[SkippedService] = None

    def __post_init__(self):
        if self.ecs is None:
            self.ecs = boto3.client("ecs", region_name=self.region)

    @property
    def service_arns(self) -> List[str]:
        if self._service_arns is None:
            self._service_arns = self._list_service_arns()
        return self._service_arns

    @property
    def services(self) -> List[ServiceRecord]:
        if self._services is None:
            self._load_services()
        return self._services

    @property
    def skipped(self) -> List[SkippedService]:
        if self._skipped is None:
            self._load_services()
        return self._skipped

    def _list_service_arns(self) -> List[str]:
        arns = []
        paginator = self.ecs.get_paginator("list_services")
        responses = paginator.paginate(
            cluster=self.name,
            PaginationConfig={"PageSize": self.list_page_size},
        )
        for response in responses:
            arns.extend(response.get("serviceArns", []))
        log.info("listed services", cluster=self.name, count=len(arns))
        return sorted(arns)

    def _load_services(self):
        chunks = chunked(self.service_arns, self.page_size)

        if self.max_workers > 1 and len(chunks) > 1:
            results: List[Optional[Tuple[list, list]]] = [None] * len(chunks)
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                futures = {
                    pool.submit(self._load_chunk, chunk): index
                    for index, chunk in enumerate(chunks)
                }
                for future, index in futures.items():
                    results[index] = future.result()
        else:
            results = [self._load_chunk(chunk) for chunk in chunks]

        self._services = [record for records, _ in results for record in records]
        self._skipped = [skip for _, skips in results for skip in skips]
        log.info(
            "resolved services",
            cluster=self.name,
            resolved=len(self._services),
            skipped=len(self._skipped),
        )

    def _load_chunk(
        self, chunk: List[str]
    ) -> Tuple[List[ServiceRecord], List[SkippedService]]:
        records, skipped = [], []

        try:
            response = self.ecs.describe_services(cluster=self.name, services=chunk)
        except (BotoCoreError, ClientError) as e:
            for arn in chunk:
                skipped.append(self._skip(arn, DESCRIBE_SERVICES, str(e)))
            return records, skipped

        failures = response.get("failures") or []
        for failure in failures:
            skipped.append(
                self._skip(
                    failure.get("arn", ""),
                    DESCRIBE_SERVICES,
                    failure.get("reason") or failure.get("detail") or "unknown failure",
                )
            )

        ecs_services = response.get("services") or []

        # every requested ARN must come back as a service or a failure
        accounted = {s.get("serviceArn") for s in ecs_services}
        accounted.update(f.get("arn") for f in failures)
        for arn in chunk:
            if arn not in accounted:
                skipped.append(self._skip(arn, DESCRIBE_SERVICES, "not returned"))

        for ecs_service in ecs_services:
            try:
                task_definition = self.ecs.describe_task_definition(
                    taskDefinition=ecs_service.get("taskDefinition") or ""
                ).get("taskDefinition") or {}
            except (BotoCoreError, ClientError) as e:
                skipped.append(
                    self._skip(
                        ecs_service.get("serviceArn")
                        or ecs_service.get("serviceName")
                        or ecs_service.get("taskDefinition")
                        or "",
                        DESCRIBE_TASK_DEFINITION,
                        str(e),
                    )
                )
                continue

            record = ServiceRecord.from_description(ecs_service, task_definition)
            records.append(record)
            if self.on_service is not None:
                self.on_service(record)

        return records, skipped

    def _skip(self, identifier: str, stage: str, reason: str) -> SkippedService:
        log.debug("skipping service", service=identifier, stage=stage, reason=reason)
        return SkippedService(identifier=identifier, stage=stage, reason=reason)
