"""
Writing detection overlap reports.

Creates:
- detection_overlap.json: matches, false negatives, false positives, summary
- detection_overlap_summary.txt: human-readable summary
"""

import json
import os

from detoverlap.tracer import get_tracer, trace


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def save_json(data, path, indent=2):
    """Save a dictionary or Pydantic model to JSON."""
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(data, "model_dump"):
        data = data.model_dump()

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    tracer.event(f"Saved JSON: {path}")


@trace(label="save_report")
def save_report(report, out_dir, sources=None):
    """
    Save a DetectionOverlapReport to out_dir.

    sources is an optional dict (e.g. ground truth / reconstruction paths)
    stored alongside the results.

    Returns (json_path, summary_path).
    """
    tracer = get_tracer()

    ensure_dir(out_dir)

    data = report.model_dump()
    data["summary"] = report.summary()
    if sources:
        data["sources"] = dict(sources)

    json_path = os.path.join(out_dir, "detection_overlap.json")
    save_json(data, json_path)

    summary_path = os.path.join(out_dir, "detection_overlap_summary.txt")
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write(format_summary(report))

    tracer.event(f"Report saved: {report.num_matches} matches")

    return json_path, summary_path


def format_summary(report):
    """Render a report as plain text."""
    lines = ["Detection Overlap Report", "=" * 40, ""]

    lines.append(f"Matches:         {report.num_matches}")
    lines.append(f"False negatives: {report.num_false_negatives}")
    lines.append(f"False positives: {report.num_false_positives}")
    lines.append(f"Precision:       {report.precision:.4f}")
    lines.append(f"Recall:          {report.recall:.4f}")
    lines.append(f"F1:              {report.f1:.4f}")
    lines.append(f"Mean M1:         {report.mean_m1:.2f}")
    lines.append(f"Mean M2:         {report.mean_m2:.2f}")
    lines.append(f"Mean Dice:       {report.mean_dice:.4f}")
    lines.append("")

    if report.matches:
        lines.append("MATCHES:")
        lines.append("-" * 40)
        for match in report.matches:
            lines.append(format_match(match))
        lines.append("")

    if report.false_negatives:
        lines.append("FALSE NEGATIVES: " + ", ".join(str(l) for l in report.false_negatives))
    if report.false_positives:
        lines.append("FALSE POSITIVES: " + ", ".join(str(l) for l in report.false_positives))

    return "\n".join(lines) + "\n"


def format_match(match):
    """Format a single match for display."""
    return (
        f"gt {match.gt_label} -> rec {match.rec_label}: "
        f"M1={match.m1:.2f} M2={match.m2:.2f} Dice={match.dice:.4f}"
    )
