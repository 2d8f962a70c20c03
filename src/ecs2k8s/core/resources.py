"""ECS CPU/memory units to Kubernetes resource quantities."""

from ecs2k8s.core.constants import (
    DEFAULT_CPU, MAX_CPU_UNITS, DEFAULT_MEMORY, MAX_MEMORY_MB, MAX_MEMORY,
)


def cpu_to_quantity(cpu: int | None, warnings: list[str] | None = None) -> str:
    """Map ECS CPU units to a millicore quantity (1 unit = 1m).

    Missing or non-positive values fall back to 100m, values above 16 cores
    are capped. Never raises.
    """
    if cpu is None or cpu <= 0:
        return DEFAULT_CPU
    if cpu > MAX_CPU_UNITS:
        if warnings is not None:
            warnings.append(f"CPU value {cpu} exceeds maximum ({MAX_CPU_UNITS}m), "
                            f"capped at {MAX_CPU_UNITS}m")
        return f"{MAX_CPU_UNITS}m"
    return f"{cpu}m"


def memory_to_quantity(memory: int | None, warnings: list[str] | None = None) -> str:
    """Map ECS memory (MB) to a binary quantity (1 MB = 1Mi).

    Missing or non-positive values fall back to 128Mi, values above 256 GiB
    are capped. Never raises.
    """
    if memory is None or memory <= 0:
        return DEFAULT_MEMORY
    if memory > MAX_MEMORY_MB:
        if warnings is not None:
            warnings.append(f"memory value {memory} exceeds maximum ({MAX_MEMORY}), "
                            f"capped at {MAX_MEMORY}")
        return MAX_MEMORY
    return f"{memory}Mi"
