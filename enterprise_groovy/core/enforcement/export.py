"""Export functions for enforcement results.

Provides:
- export_json: Full structured output
- export_csv: Flattened diagnostics table
- export_markdown: Human-readable report
- export_provenance: Audit trail
- export_all: All of the above into one directory
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ...config import Configuration
from .engine import EnforcementResult
from .rules.base import Diagnostic

CSV_COLUMNS = ["unit", "owner", "node_kind", "node_name", "rule_id", "message"]


def export_json(
    result: EnforcementResult,
    output_path: Path,
    config: Optional[Configuration] = None,
) -> Path:
    """Export enforcement result to JSON file.

    Parameters
    ----------
    result : EnforcementResult
        Enforcement result
    output_path : Path
        Output file path
    config : Configuration, optional
        Configuration used for the run, embedded when given

    Returns
    -------
    Path
        Path to created file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = result.to_dict()
    if config is not None:
        data["configuration"] = config.to_dict()
    data["export_timestamp"] = datetime.now().isoformat()
    data["export_version"] = "1.0"

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2, default=str)

    return output_path


def export_csv(
    diagnostics: List[Diagnostic],
    output_path: Path,
) -> Path:
    """Export diagnostics to CSV file, one row per diagnostic in emission order.

    Parameters
    ----------
    diagnostics : List[Diagnostic]
        Diagnostics to export
    output_path : Path
        Output file path

    Returns
    -------
    Path
        Path to created file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    rows = [d.to_dict() for d in diagnostics]
    df = pd.DataFrame(rows)
    if df.empty:
        df = pd.DataFrame(columns=CSV_COLUMNS)
    if "rejected" in df.columns:
        df["rejected"] = df["rejected"].apply(
            lambda v: ";".join(v) if isinstance(v, list) else v
        )

    df.to_csv(output_path, index=False)
    return output_path


def export_markdown(
    result: EnforcementResult,
    output_path: Path,
) -> Path:
    """Export enforcement result to Markdown report.

    Parameters
    ----------
    result : EnforcementResult
        Enforcement result
    output_path : Path
        Output file path

    Returns
    -------
    Path
        Path to created file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    lines = _format_report(result)

    with open(output_path, "w") as f:
        f.write("\n".join(lines))

    return output_path


def _format_report(result: EnforcementResult) -> List[str]:
    lines = [
        "# Static Compilation Enforcement Report",
        "",
        f"**Generated**: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
        f"**Execution Time**: {result.execution_time_seconds:.2f}s",
        "",
    ]

    lines.extend([
        "## Summary",
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| Units Processed | {len(result.units_processed)} |",
        f"| Units Skipped | {len(result.units_skipped)} |",
        f"| Classes Checked | {len(result.classes_checked)} |",
        f"| Classes Exempt | {len(result.classes_exempt)} |",
        f"| Classes Annotated | {len(result.annotated_classes)} |",
        f"| Diagnostics | {result.n_diagnostics} |",
        "",
    ])

    if result.rules_run:
        lines.append(f"**Active rules**: {', '.join(result.rules_run)}")
        lines.append("")

    if not result.diagnostics:
        lines.extend([
            "## Diagnostics",
            "",
            "No diagnostics.",
            "",
        ])
        return lines

    lines.extend([
        "## Diagnostics",
        "",
    ])

    # Group by owning class, keeping emission order
    grouped: Dict[str, List[Diagnostic]] = {}
    for diagnostic in result.diagnostics:
        grouped.setdefault(diagnostic.owner, []).append(diagnostic)

    for owner, diagnostics in grouped.items():
        lines.append(f"### `{owner}` ({len(diagnostics)})")
        lines.append("")
        for d in diagnostics:
            lines.append(f"- **{d.rule_id}** {d.node_kind} `{d.node_name}`: {d.message}")
        lines.append("")

    return lines


def export_provenance(
    result: EnforcementResult,
    output_path: Path,
    config: Optional[Configuration] = None,
    tree_path: Optional[Path] = None,
) -> Path:
    """Export provenance information for audit trail.

    Parameters
    ----------
    result : EnforcementResult
        Enforcement result
    output_path : Path
        Output file path
    config : Configuration, optional
        Configuration used for the run
    tree_path : Path, optional
        Tree descriptor file used

    Returns
    -------
    Path
        Path to created file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    provenance = {
        "export_timestamp": datetime.now().isoformat(),
        "export_version": "1.0",
        "tree_path": str(tree_path) if tree_path else None,
        "configuration_source": config.source if config else None,
        "units_processed": result.units_processed,
        "units_skipped": result.units_skipped,
        "total_diagnostics": result.n_diagnostics,
        "execution_time_seconds": result.execution_time_seconds,
    }

    with open(output_path, "w") as f:
        json.dump(provenance, f, indent=2)

    return output_path


def export_all(
    result: EnforcementResult,
    output_dir: Path,
    config: Optional[Configuration] = None,
    tree_path: Optional[Path] = None,
) -> Dict[str, Path]:
    """Export all formats into a directory.

    Returns
    -------
    Dict[str, Path]
        Format name to created file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    return {
        "json": export_json(result, output_dir / "enforcement_result.json", config),
        "csv": export_csv(result.diagnostics, output_dir / "diagnostics.csv"),
        "markdown": export_markdown(result, output_dir / "enforcement_report.md"),
        "provenance": export_provenance(
            result, output_dir / "provenance.json", config, tree_path
        ),
    }
