from __future__ import annotations

import pytest

from ecs2k8s.pacts.types import (
    ContainerDefinition, ConvertContext, KeyValuePair, PortMapping, TaskDefinitionSource,
)
from ecs2k8s.io.config import load_config


def make_container(name="web", image="nginx:1.21", cpu=512, memory=256,
                   ports=(80,), env=None) -> ContainerDefinition:
    return ContainerDefinition(
        name=name,
        image=image,
        cpu=cpu,
        memory=memory,
        port_mappings=[PortMapping(container_port=p) for p in ports],
        environment=[KeyValuePair(name=k, value=v) for k, v in (env or {}).items()],
    )


@pytest.fixture
def config() -> dict:
    return load_config(None)


@pytest.fixture
def ctx(config) -> ConvertContext:
    return ConvertContext(config=config, warnings=[])


@pytest.fixture
def webapp() -> TaskDefinitionSource:
    return TaskDefinitionSource(
        name="webapp",
        containers=[make_container(env={"LOG_LEVEL": "info", "AWS_ACCESS_KEY_ID": "xxx"})],
    )


@pytest.fixture
def two_containers() -> TaskDefinitionSource:
    return TaskDefinitionSource(
        name="webapp",
        containers=[
            make_container(name="api", image="example/api:2", ports=(8080,),
                           env={"MODE": "api", "TOKEN_URL": "https://auth"}),
            make_container(name="worker", image="example/worker:2", ports=(9090,),
                           env={"MODE": "worker"}),
        ],
        task_role_arn="arn:aws:iam::123456789012:role/webapp-task",
        execution_role_arn="arn:aws:iam::123456789012:role/ecsTaskExecutionRole",
    )
