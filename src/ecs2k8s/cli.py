"""CLI entry point: argument parsing, run orchestration, summary report."""

import argparse
import os
import sys
from pathlib import Path

from ecs2k8s.pacts.types import ConvertContext, RunSummary, TaskDefinitionSource
from ecs2k8s.pacts.errors import (
    ConversionError, OutputDirError, OutputError, Ecs2K8sError, ManifestValidationError,
)
from ecs2k8s.core.convert import build_task_def_info
from ecs2k8s.core.helm import HelmRenderer
from ecs2k8s.core.kustomize import KustomizeRenderer
from ecs2k8s.io.config import load_config, save_config, config_warnings
from ecs2k8s.io.output import check_output_dir, write_manifests, write_file_set, emit_warnings
from ecs2k8s.io.parsing import load_task_definitions
from ecs2k8s.io.validate import validate_cluster_name, validate_file_set


def run_conversion(sources: list[TaskDefinitionSource], output_dir: str, config: dict,
                   cluster: str = "", create_helm: bool = False,
                   create_kustomize: bool = False,
                   warnings: list[str] | None = None,
                   summary: RunSummary | None = None) -> RunSummary:
    """Convert and write every task definition, then build the requested packages.

    A task that cannot be converted or written is counted as failed and the
    run moves on. An unusable output directory aborts the run; a summary
    passed in is filled as tasks complete, so it still holds the partial
    counts when an error propagates.
    """
    check_output_dir(output_dir)
    ctx = ConvertContext(config=config, warnings=warnings if warnings is not None else [])
    if summary is None:
        summary = RunSummary(output_dir=output_dir)

    for source in sources:
        try:
            info = build_task_def_info(source, ctx)
            summary.written.extend(write_manifests(output_dir, info.name, info.manifests, config))
        except OutputDirError:
            raise
        except (ConversionError, OutputError, ManifestValidationError) as exc:
            ctx.warnings.append(f"task definition '{source.name}' failed: {exc}")
            summary.failed += 1
            continue
        print(f"✓ Generated manifests for {info.name}", file=sys.stderr)
        summary.succeeded += 1
        summary.infos.append(info)

    if create_helm and summary.infos:
        files = HelmRenderer(cluster, config).render(summary.infos)
        summary.written.extend(write_file_set(output_dir, files))
        summary.helm_path = os.path.join(output_dir, "helm", cluster)

    if create_kustomize and summary.infos:
        files = KustomizeRenderer(cluster, config).render(summary.infos)
        validate_file_set(files)
        summary.written.extend(write_file_set(output_dir, files))
        summary.kustomize_path = os.path.join(output_dir, "kustomize", cluster)

    return summary


def print_summary(summary: RunSummary) -> None:
    """Print the conversion summary to stderr."""
    lines = [
        "",
        "=" * 40,
        "Conversion Summary",
        "=" * 40,
        f"Successfully converted: {summary.succeeded} task definition(s)",
        f"Failed: {summary.failed} task definition(s)",
        f"Output directory: {summary.output_dir}",
    ]
    if summary.helm_path:
        lines.append(f"Helm chart: {summary.helm_path}")
    if summary.kustomize_path:
        lines.append(f"Kustomize structure: {summary.kustomize_path}")
    lines.append("=" * 40)
    print("\n".join(lines), file=sys.stderr)


def _default_cluster(input_path: str) -> str:
    """Cluster name inferred from the input path (directory name or file stem)."""
    p = Path(os.path.realpath(input_path))
    return p.name if p.is_dir() else p.stem


def _abort(message: str, summary: RunSummary):
    """Report a run-level error with the summary so far, then exit 1."""
    print(f"Error: {message}", file=sys.stderr)
    print_summary(summary)
    sys.exit(1)


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Convert AWS ECS task definitions to Kubernetes manifests, "
                    "optionally packaged as a Helm chart or Kustomize tree"
    )
    parser.add_argument(
        "-i", "--input", required=True,
        help="Task definition file (JSON/YAML, e.g. aws ecs describe-task-definition output) "
             "or a directory of them",
    )
    parser.add_argument(
        "-c", "--cluster",
        help="Cluster name, used for the Helm chart and Kustomize tree "
             "(default: input directory name or file stem)",
    )
    parser.add_argument(
        "-o", "--output-dir",
        help="Where to write manifests (default: ./<cluster>)",
    )
    parser.add_argument(
        "--config",
        help="Path to ecs2k8s.yaml (default: <output-dir>/ecs2k8s.yaml)",
    )
    parser.add_argument(
        "-H", "--create-helm", action="store_true",
        help="Create a Helm chart",
    )
    parser.add_argument(
        "-K", "--create-kustomize", action="store_true",
        help="Create a Kustomize structure with base and dev/staging/prod overlays",
    )
    args = parser.parse_args()

    try:
        cluster = validate_cluster_name(args.cluster or _default_cluster(args.input))
        sources = load_task_definitions(args.input)
    except Ecs2K8sError as exc:
        _abort(str(exc), RunSummary(output_dir=args.output_dir or ""))
    print(f"Loaded {len(sources)} task definition(s) from {args.input}", file=sys.stderr)

    output_dir = args.output_dir or os.path.join(os.getcwd(), cluster)
    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as exc:
        _abort(f"cannot create output directory {output_dir} ({exc})",
               RunSummary(output_dir=output_dir, failed=len(sources)))

    config_path = args.config or os.path.join(output_dir, "ecs2k8s.yaml")
    first_run = not os.path.exists(config_path)
    config = load_config(config_path)
    warnings = config_warnings(config)

    if not sources:
        emit_warnings(warnings)
        print("No task definitions found. Nothing to convert.", file=sys.stderr)
        print_summary(RunSummary(output_dir=output_dir))
        sys.exit(1)

    summary = RunSummary(output_dir=output_dir)
    try:
        summary = run_conversion(sources, output_dir, config, cluster=cluster,
                                 create_helm=args.create_helm,
                                 create_kustomize=args.create_kustomize,
                                 warnings=warnings, summary=summary)
    except Ecs2K8sError as exc:
        emit_warnings(warnings)
        # Tasks not reached before the abort count as failed
        summary.failed = len(sources) - summary.succeeded
        _abort(str(exc), summary)

    emit_warnings(warnings)
    print_summary(summary)

    if first_run:
        save_config(config_path, config)
        print(f"Wrote {config_path}", file=sys.stderr)

    if summary.succeeded == 0:
        print("No task definitions were successfully converted.", file=sys.stderr)
        sys.exit(1)
    print("✅ Conversion complete!", file=sys.stderr)


if __name__ == "__main__":
    main()
