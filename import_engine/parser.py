"""
import_engine.parser - Format dispatch: raw payload → ExportedSnapshot.

Parsing is all-or-nothing.  Every failure surfaces as
MalformedInputError with the original exception chained as __cause__.
"""

from __future__ import annotations

import json

import config
from import_engine.csv_parser import decode, parse_csv
from import_engine.errors import MalformedInputError
from import_engine.snapshot import ExportedSnapshot


def parse(raw: str | bytes | None, fmt: str) -> ExportedSnapshot:
    fmt = (fmt or "").lower()
    if fmt not in config.IMPORT_FORMATS:
        raise MalformedInputError(f"Unsupported import format: {fmt!r}")
    if raw is None or not decode(raw).strip():
        raise MalformedInputError(f"{fmt.upper()} data is empty")

    try:
        if fmt == "json":
            return ExportedSnapshot.from_dict(json.loads(decode(raw)))
        return parse_csv(raw)
    except Exception as exc:
        raise MalformedInputError(f"Invalid {fmt.upper()} format: {exc}") from exc
