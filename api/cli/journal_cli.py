"""Render a compact, line-based text dump of a design-session journal.

Records are grouped by session in the order they were written; every input
and output value is collapsed to one line and trimmed to ``--max-chars``.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import config

PROJECT_ROOT = Path(__file__).resolve().parents[1]
JOURNAL_DIR = PROJECT_ROOT / "designer/logging"

# Maximum number of characters to show for any field value.
DEFAULT_FIELD_WIDTH = 60


@dataclass(slots=True)
class JournalRecord:
    session_id: str
    action: str
    timestamp: str
    input_value: Any
    output_value: Any
    index: int


def _resolve_default_log_file() -> Path:
    if JOURNAL_DIR.exists():
        log_files = [
            path
            for path in JOURNAL_DIR.iterdir()
            if path.is_file() and path.suffix == ".log"
        ]
        if log_files:
            return max(log_files, key=lambda item: item.stat().st_mtime)
    return config.load_settings().journal_path


def load_records(path: Path) -> list[JournalRecord]:
    records: list[JournalRecord] = []

    with path.open(encoding="utf-8") as handle:
        for index, raw_line in enumerate(handle):
            line = raw_line.strip()
            if not line:
                continue
            payload = json.loads(line)
            records.append(
                JournalRecord(
                    session_id=str(payload.get("session_id", "")),
                    action=str(payload.get("action", "")),
                    timestamp=str(payload.get("timestamp", "")),
                    input_value=payload.get("input"),
                    output_value=payload.get("output"),
                    index=index,
                )
            )
    return records


def group_by_session(records: Iterable[JournalRecord]) -> dict[str, list[JournalRecord]]:
    sessions: dict[str, list[JournalRecord]] = {}
    for record in records:
        sessions.setdefault(record.session_id, []).append(record)
    return sessions


def _compact(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    cutoff = max(limit - 3, 0)
    return text[:cutoff] + "..."


def _stringify_value(value: Any, limit: int) -> str:
    if value is None:
        return "<none>"
    if isinstance(value, (bool, int, float, str)):
        text = str(value)
    else:
        text = json.dumps(value, ensure_ascii=False)

    text = " ".join(text.split())
    return _compact(text, limit)


def _render_record(record: JournalRecord, is_last: bool, limit: int) -> list[str]:
    connector = "`--" if is_last else "|--"
    body = "   " if is_last else "|  "
    return [
        f"{connector}{record.action} [idx {record.index}]",
        f"{body}ts: {record.timestamp}",
        f"{body}input: {_stringify_value(record.input_value, limit)}",
        f"{body}output: {_stringify_value(record.output_value, limit)}",
    ]


def render_dump(records: list[JournalRecord], limit: int) -> str:
    lines: list[str] = []
    for session_id, session_records in group_by_session(records).items():
        lines.append(f"session {session_id} ({len(session_records)} actions)")
        for idx, record in enumerate(session_records):
            lines.extend(
                _render_record(record, idx == len(session_records) - 1, limit)
            )
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def write_dump(log_path: Path | None, output_path: Path | None, limit: int) -> Path:
    log_path = log_path or _resolve_default_log_file()
    output_path = output_path or config.load_settings().journal_report_path

    text = render_dump(load_records(log_path), limit)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text, encoding="utf-8")
    print(f"Journal dump written to: {output_path}")
    return output_path


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a compact text dump of a design-session journal."
    )
    parser.add_argument(
        "--log",
        type=Path,
        help="Path to the journal file. Defaults to the newest journal if available.",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Destination text file. Defaults to the journal report path from settings.",
    )
    parser.add_argument(
        "--max-chars",
        type=int,
        default=DEFAULT_FIELD_WIDTH,
        help=f"Maximum number of characters for each field value (default: {DEFAULT_FIELD_WIDTH}).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    write_dump(args.log, args.output, args.max_chars)


if __name__ == "__main__":
    main()
