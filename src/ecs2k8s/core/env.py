"""Environment variable classification: ConfigMap vs Secret."""

from ecs2k8s.pacts.types import KeyValuePair
from ecs2k8s.core.constants import SECRET_PREFIXES


def is_secret_name(name: str, prefixes=SECRET_PREFIXES) -> bool:
    """True if name starts (case-insensitively) with one of the secret prefixes."""
    upper = name.upper()
    return any(upper.startswith(p.upper()) for p in prefixes)


def classify_env(pairs: list[KeyValuePair], warnings: list[str] | None = None,
                 prefixes=SECRET_PREFIXES) -> tuple[dict[str, str], dict[str, str]]:
    """Split env pairs into (config_vars, secret_vars), preserving input order.

    Entries with an empty name or no value are dropped from both buckets.
    """
    config_vars: dict[str, str] = {}
    secret_vars: dict[str, str] = {}
    for pair in pairs:
        if not pair.name:
            if warnings is not None:
                warnings.append("environment variable with empty name skipped")
            continue
        if pair.value is None:
            if warnings is not None:
                warnings.append(f"environment variable {pair.name} has no value, skipped")
            continue
        if is_secret_name(pair.name, prefixes):
            secret_vars[pair.name] = pair.value
        else:
            config_vars[pair.name] = pair.value
    return config_vars, secret_vars


def secret_prefixes(config: dict) -> tuple[str, ...]:
    """Built-in prefixes plus any extra_secret_prefixes from config."""
    extra = config.get("extra_secret_prefixes") or ()
    if isinstance(extra, str):  # a single prefix, not its characters
        extra = (extra,)
    elif not isinstance(extra, (list, tuple)):
        extra = ()
    extra = tuple(p for p in extra if isinstance(p, str) and p)
    return SECRET_PREFIXES + extra
