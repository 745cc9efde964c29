"""Loading of configuration tables from CSV files into dataclass records.

The first row of a table holds the column names. A record field is bound to
a column through the ``"csv"`` entry of its dataclass field metadata (the
field name is used when there is none). Digits at either end of a column
name are ignored, so ``Reward1`` and ``Reward2`` both feed a field bound to
``Reward``; list fields collect every such column in order.
"""

from __future__ import annotations

import csv
import dataclasses
import logging
import re
import typing
import unicodedata
from pathlib import Path
from typing import Any, Sequence, TypeVar

logger = logging.getLogger(__name__)

CSV_METADATA_KEY = "csv"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_LIST_ANNOTATION_RE = re.compile(r"(?:typing\.)?(?:list|List)\[\s*(int|str|float)\s*\]")
_SCALARS = ("int", "str", "float")
_BOM = "\ufeff"

T = TypeVar("T")


class CsvLoadError(Exception):
    """A table could not be read or holds no records."""


def _is_number(char: str) -> bool:
    return unicodedata.category(char).startswith("N")


def trim_number(text: str) -> str:
    """Strip numeric characters from both ends of the text."""
    start, end = 0, len(text)
    while start < end and _is_number(text[start]):
        start += 1
    while end > start and _is_number(text[end - 1]):
        end -= 1
    return text[start:end]


def read_csv(path: str | Path) -> list[list[str]]:
    """Return the non-empty rows of a CSV file, with a leading BOM removed."""
    try:
        with open(path, newline="", encoding="utf-8") as handle:
            rows = [row for row in csv.reader(handle) if row]
    except OSError as exc:
        raise CsvLoadError(f"cannot read {path}: {exc}") from exc
    if rows and _BOM in rows[0][0]:
        rows[0][0] = rows[0][0].replace(_BOM, "", 1)
    return rows


def _parse_int(cell: str) -> int | None:
    if _INT_RE.fullmatch(cell) is None:
        return None
    return int(cell)


def _parse_float(cell: str) -> float | None:
    if not cell or cell != cell.strip() or "_" in cell:
        return None
    try:
        return float(cell)
    except ValueError:
        return None


def _kind(annotation: Any) -> str | None:
    """Classify a field annotation, given either as a type or as its text."""
    if isinstance(annotation, str):
        text = annotation.strip()
        if text in _SCALARS:
            return text
        match = _LIST_ANNOTATION_RE.fullmatch(text)
        return f"list_{match.group(1)}" if match else None
    if annotation in (int, str, float):
        return annotation.__name__
    if typing.get_origin(annotation) is list:
        args = typing.get_args(annotation)
        if len(args) == 1 and args[0] in (int, str, float):
            return f"list_{args[0].__name__}"
    return None


@dataclasses.dataclass(frozen=True)
class _Spec:
    name: str
    kind: str | None
    field: dataclasses.Field


def _zero(spec: _Spec) -> Any:
    if spec.kind == "int":
        return 0
    if spec.kind == "str":
        return ""
    if spec.kind == "float":
        return 0.0
    if spec.kind is not None:
        return []
    if spec.field.default is not dataclasses.MISSING:
        return spec.field.default
    if spec.field.default_factory is not dataclasses.MISSING:
        return spec.field.default_factory()
    return None


def _specs(record_type: type) -> tuple[dict[str, _Spec], str]:
    if not dataclasses.is_dataclass(record_type):
        raise TypeError(f"{record_type!r} is not a dataclass")
    specs: dict[str, _Spec] = {}
    key_tag = ""
    for position, fld in enumerate(f for f in dataclasses.fields(record_type) if f.init):
        tag = trim_number(fld.metadata.get(CSV_METADATA_KEY, fld.name))
        specs[tag] = _Spec(fld.name, _kind(fld.type), fld)
        if position == 0:
            key_tag = tag
    return specs, key_tag


def _parse_keyed(rows: Sequence[Sequence[str]], record_type: type[T]) -> list[tuple[int, T]]:
    if not rows:
        return []
    headers = list(rows[0])
    specs, key_tag = _specs(record_type)
    result: list[tuple[int, T]] = []
    for row_number, row in enumerate(rows[1:], start=1):
        values = {spec.name: _zero(spec) for spec in specs.values()}
        key = 0
        for column, cell in enumerate(row):
            tag = trim_number(headers[column]) if column < len(headers) else ""
            spec = specs.get(tag)
            if spec is None or spec.kind is None:
                continue
            if not _store(spec, cell, values):
                logger.warning(
                    "bad value %r, fieldName: %s, row: %d, col: %d",
                    cell, spec.name, row_number, column,
                )
                continue
            if spec.kind == "int" and tag == key_tag and key == 0:
                key = values[spec.name]
        result.append((key, record_type(**values)))
    return result


def _store(spec: _Spec, cell: str, values: dict[str, Any]) -> bool:
    kind = spec.kind
    if kind == "str":
        values[spec.name] = cell
    elif kind == "list_str":
        values[spec.name].append(cell)
    elif kind in ("int", "list_int"):
        number = _parse_int(cell)
        if number is None and kind == "list_int":
            real = _parse_float(cell)
            if real is None:
                return False
            try:
                number = int(real * 10)
            except (OverflowError, ValueError):
                return False
        if number is None:
            return False
        if kind == "int":
            values[spec.name] = number
        else:
            values[spec.name].append(number)
    elif kind in ("float", "list_float"):
        real = _parse_float(cell)
        if real is None:
            return False
        if kind == "float":
            values[spec.name] = real
        else:
            values[spec.name].append(real)
    return True


def parse_records(rows: Sequence[Sequence[str]], record_type: type[T]) -> list[T]:
    """Build one record per data row; the first row names the columns."""
    return [record for _, record in _parse_keyed(rows, record_type)]


def _load_rows(path: str | Path) -> list[list[str]]:
    rows = read_csv(path)
    if len(rows) <= 1:
        raise CsvLoadError(f"len(csvData) <= 1, filename: {path}")
    return rows


def load_list(path: str | Path, record_type: type[T]) -> list[T]:
    """Load a table as a list of records in file order."""
    return parse_records(_load_rows(path), record_type)


def load_map(path: str | Path, record_type: type[T]) -> dict[int, T]:
    """Load a table keyed by the first field; later rows replace earlier ones."""
    return dict(_parse_keyed(_load_rows(path), record_type))