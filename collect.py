"""Batch classification utility for URLs and emails."""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from api.api import classify_email, classify_url, normalize_url
from config import configure_logging

logger = logging.getLogger("collect")

EMAIL_FIELDS = ("subject", "content", "sender")


def _normalize_input_format(path: Path, explicit: Optional[str]) -> str:
    if explicit:
        return explicit.lower()
    suffix = path.suffix.lower()
    if suffix in {".txt", ".list"}:
        return "txt"
    if suffix == ".jsonl":
        return "jsonl"
    return "csv"


def _normalize_output_format(path: Path, explicit: Optional[str]) -> str:
    if explicit:
        return explicit.lower()
    if path.suffix.lower() == ".csv":
        return "csv"
    return "jsonl"


def _entry(data: Dict, kind: str) -> Optional[Dict]:
    """Pick the fields for ``kind`` out of a row, None when any is missing."""
    if kind == "url":
        url = str(data.get("url") or data.get("URL") or "").strip()
        if not url:
            return None
        entry = {"url": url}
    else:
        entry = {}
        for key in EMAIL_FIELDS:
            value = data.get(key)
            if value is None or str(value) == "":
                return None
            entry[key] = str(value)
    label = data.get("label")
    if label is not None and str(label).strip() != "":
        entry["label"] = label
    return entry


def _read_txt(path: Path, kind: str) -> Iterator[Dict]:
    if kind != "url":
        raise ValueError("Plain text input only supports URLs")
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            url = line.strip()
            if not url or url.startswith("#"):
                continue
            yield {"url": url}


def _read_csv(path: Path, kind: str) -> Iterator[Dict]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        for line_no, row in enumerate(reader, start=2):
            if not row:
                continue
            entry = _entry(row, kind)
            if entry is None:
                logger.warning("Skipping row %d of %s: missing fields", line_no, path)
                continue
            yield entry


def _read_jsonl(path: Path, kind: str) -> Iterator[Dict]:
    with path.open("r", encoding="utf-8") as handle:
        for line_no, line in enumerate(handle, start=1):
            raw = line.strip()
            if not raw or raw.startswith("#"):
                continue
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Skipping line %d of %s: invalid JSON", line_no, path)
                continue
            if isinstance(data, str) and kind == "url":
                data = {"url": data}
            if not isinstance(data, dict):
                continue
            entry = _entry(data, kind)
            if entry is None:
                logger.warning("Skipping line %d of %s: missing fields", line_no, path)
                continue
            yield entry


def _iter_inputs(path: Path, input_format: str, kind: str) -> Iterator[Dict]:
    if input_format == "txt":
        return _read_txt(path, kind)
    if input_format == "jsonl":
        return _read_jsonl(path, kind)
    return _read_csv(path, kind)


def _summarize(entry: Dict, kind: str) -> Dict:
    if kind == "url":
        response = classify_url(normalize_url(entry["url"])).to_response()
        verdict_key = "isPhishing"
    else:
        response = classify_email(entry["subject"], entry["content"], entry["sender"]).to_response()
        verdict_key = "isSpam"
    summary = {k: response[k] for k in ("url", "subject", "sender") if k in response}
    summary.update({
        "label": entry.get("label"),
        verdict_key: response[verdict_key],
        "confidence": response["confidence"],
        "reasons": response["reasons"],
        "features": response["features"],
    })
    return summary


def _write_jsonl(rows: Iterable[Dict], path: Path) -> None:
    with path.open("w", encoding="utf-8") as handle:
        for row in rows:
            handle.write(json.dumps(row, ensure_ascii=False))
            handle.write("\n")


def _write_csv(rows: Iterable[Dict], path: Path) -> None:
    rows = list(rows)
    if not rows:
        return
    fieldnames = list(rows[0].keys())
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            row = dict(row)
            for key in ("features", "reasons"):
                row[key] = json.dumps(row[key], ensure_ascii=False)
            writer.writerow(row)


def run_collect(input_path: Path, output_path: Path, input_format: str, output_format: str,
                kind: str = "url") -> List[Dict]:
    outputs = [_summarize(entry, kind) for entry in _iter_inputs(input_path, input_format, kind)]
    flag = "isPhishing" if kind == "url" else "isSpam"
    logger.info("Classified %d %s entries, %d flagged", len(outputs), kind,
                sum(1 for row in outputs if row[flag]))

    if output_format == "csv":
        _write_csv(outputs, output_path)
    else:
        _write_jsonl(outputs, output_path)
    return outputs


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Classify a list of URLs or emails.")
    parser.add_argument("input", help="Path to input list (.txt, .csv, .jsonl)")
    parser.add_argument("output", help="Path to output file (.jsonl or .csv)")
    parser.add_argument(
        "--kind",
        choices=["url", "email"],
        default="url",
        help="What the input rows contain (emails need subject, content and sender)",
    )
    parser.add_argument(
        "--input-format",
        choices=["txt", "csv", "jsonl"],
        help="Override input format detection",
    )
    parser.add_argument(
        "--output-format",
        choices=["jsonl", "csv"],
        help="Override output format detection",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    input_path = Path(args.input)
    output_path = Path(args.output)

    if not input_path.exists():
        print(f"Input file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    input_format = _normalize_input_format(input_path, args.input_format)
    output_format = _normalize_output_format(output_path, args.output_format)
    if input_format == "txt" and args.kind == "email":
        parser.error("email input must be csv or jsonl")

    run_collect(input_path, output_path, input_format, output_format, args.kind)


if __name__ == "__main__":
    main()
