from datetime import datetime, timezone

import boto3
import pytest
from botocore.stub import Stubber

from ecs_inventory.lib.log import configure_logging

CLUSTER = "test-cluster"
CREATED = datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def quiet_logging():
    configure_logging("CRITICAL")


@pytest.fixture
def ecs():
    return boto3.client(
        "ecs",
        region_name="us-west-2",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def stubber(ecs):
    with Stubber(ecs) as stub:
        yield stub
        stub.assert_no_pending_responses()


def arn(name):
    return f"arn:aws:ecs:us-west-2:123456789012:service/{CLUSTER}/{name}"


def ecs_service(name, **overrides):
    service = {
        "serviceArn": arn(name),
        "serviceName": name,
        "status": "ACTIVE",
        "runningCount": 2,
        "platformVersion": "1.4.0",
        "taskDefinition": f"arn:aws:ecs:us-west-2:123456789012:task-definition/{name}",
        "createdAt": CREATED,
    }
    service.update(overrides)
    return service


def add_list(stub, names, next_token=None, token=None):
    params = {"cluster": CLUSTER, "maxResults": 100}
    if token is not None:
        params["nextToken"] = token
    response = {"serviceArns": [arn(n) for n in names]}
    if next_token is not None:
        response["nextToken"] = next_token
    stub.add_response("list_services", response, params)


def add_describe(stub, names):
    stub.add_response(
        "describe_services",
        {"services": [ecs_service(n) for n in names], "failures": []},
        {"cluster": CLUSTER, "services": [arn(n) for n in names]},
    )


def add_task_definition(stub, name, cpu="256", memory="512"):
    stub.add_response(
        "describe_task_definition",
        {"taskDefinition": {"family": name, "cpu": cpu, "memory": memory}},
        {"taskDefinition": ecs_service(name)["taskDefinition"]},
    )
