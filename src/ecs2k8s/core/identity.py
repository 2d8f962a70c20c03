"""ServiceAccount derivation from task-level IAM roles (IRSA)."""

from ecs2k8s.core.constants import IRSA_ANNOTATION


def select_role_arn(task_role_arn: str | None, execution_role_arn: str | None) -> str:
    """Task role (application permissions) wins over execution role (pull/log permissions)."""
    if task_role_arn:
        return task_role_arn
    return execution_role_arn or ""


def service_account_name(task_name: str) -> str:
    return f"{task_name}-sa"


def resolve_service_account(task_name: str, task_role_arn: str | None,
                            execution_role_arn: str | None,
                            always_emit: bool = True,
                            namespace: str | None = None) -> dict | None:
    """Build the task's ServiceAccount.

    With a role ARN the account carries the IRSA annotation. Without one a
    bare account is still returned when always_emit is set, so every task
    keeps a single identity to hang image pull secrets on later.
    """
    arn = select_role_arn(task_role_arn, execution_role_arn)
    if not arn and not always_emit:
        return None
    metadata: dict = {"name": service_account_name(task_name)}
    if namespace:
        metadata["namespace"] = namespace
    metadata["labels"] = {"app": task_name}
    if arn:
        metadata["annotations"] = {IRSA_ANNOTATION: arn}
    return {
        "apiVersion": "v1",
        "kind": "ServiceAccount",
        "metadata": metadata,
    }


def role_arn_of(service_account: dict | None) -> str:
    """IRSA role ARN carried by a ServiceAccount, or an empty string."""
    if not service_account:
        return ""
    annotations = service_account.get("metadata", {}).get("annotations") or {}
    return annotations.get(IRSA_ANNOTATION, "")
