from __future__ import annotations

from ecs2k8s.core.constants import IRSA_ANNOTATION
from ecs2k8s.core.identity import resolve_service_account, role_arn_of

TASK_ROLE = "arn:aws:iam::123456789012:role/app"
EXEC_ROLE = "arn:aws:iam::123456789012:role/exec"


def test_task_role_takes_precedence() -> None:
    sa = resolve_service_account("webapp", TASK_ROLE, EXEC_ROLE)
    assert sa["kind"] == "ServiceAccount"
    assert sa["metadata"]["name"] == "webapp-sa"
    assert sa["metadata"]["annotations"] == {IRSA_ANNOTATION: TASK_ROLE}


def test_execution_role_used_as_fallback() -> None:
    sa = resolve_service_account("webapp", "", EXEC_ROLE)
    assert role_arn_of(sa) == EXEC_ROLE


def test_bare_service_account_without_roles() -> None:
    sa = resolve_service_account("webapp", None, None)
    assert sa["metadata"]["name"] == "webapp-sa"
    assert "annotations" not in sa["metadata"]
    assert role_arn_of(sa) == ""


def test_no_service_account_when_policy_disabled() -> None:
    assert resolve_service_account("webapp", None, None, always_emit=False) is None
    # A role still produces one
    assert resolve_service_account("webapp", TASK_ROLE, None, always_emit=False) is not None


def test_namespace_is_set_when_given() -> None:
    sa = resolve_service_account("webapp", None, None, namespace="apps")
    assert sa["metadata"]["namespace"] == "apps"
