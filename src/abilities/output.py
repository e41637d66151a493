"""CLI output formatting — JSON, human-readable, and compact modes."""
from __future__ import annotations

import json
import sys

import click


def output(data: dict[str, object], human: bool = False, compact: bool = False) -> None:
    """Print result as JSON (default), human-readable, or compact text."""
    if "error" in data:
        click.echo(json.dumps(data, indent=2, default=str), err=True)
        sys.exit(1)
    if compact:
        click.echo(_format_compact(data))
    elif human:
        for k, v in data.items():
            if isinstance(v, (list, dict)):
                click.echo(f"{k}: {json.dumps(v, indent=2, default=str)}")
            else:
                click.echo(f"{k}: {v}")
    else:
        click.echo(json.dumps(data, indent=2, default=str))


def _format_compact(data: dict[str, object]) -> str:
    """Format CLI output as concise text for agent context injection."""
    lines: list[str] = []

    # Resolution: applied ids + hash on one line each
    manifest = data.get("manifest")
    if isinstance(manifest, dict):
        applied = manifest.get("applied", {})
        lines.append(f"persona: {applied.get('persona', '')}")
        if applied.get("repo"):
            lines.append(f"repo: {applied['repo']}")
        if applied.get("rules"):
            lines.append(f"rules: {', '.join(applied['rules'])}")
        if applied.get("policies"):
            lines.append(f"policies: {', '.join(applied['policies'])}")
        lines.append(f"hash: {manifest.get('hash', '')}")

    # Document listings as an id table
    docs = data.get("documents")
    if isinstance(docs, list) and docs:
        for d in docs:
            if isinstance(d, dict):
                tags = ",".join(d.get("tags", []))
                lines.append(f"  {d.get('id', ''):40s} {d.get('type', ''):8s} {d.get('priority', '')!s:>5s}  {tags}")

    # Single document
    if "id" in data and "path" in data:
        lines.append(f"{data.get('type', '')}: {data['id']} -> {data['path']}")

    # Summary counts
    counts = data.get("counts")
    if isinstance(counts, dict):
        lines.append(f"{data.get('total', 0)} docs in {data.get('root', '')}")
        lines.append("  " + ", ".join(f"{k}={v}" for k, v in counts.items()))

    if not lines:
        return json.dumps(data, indent=2, default=str)

    return "\n".join(lines)
