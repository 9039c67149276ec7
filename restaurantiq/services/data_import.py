"""Spreadsheet import of ingredients, suppliers and menu items."""

from __future__ import annotations

import io
import logging
import math
import re
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Union

import pandas as pd
from pydantic import BaseModel, ValidationError
from rapidfuzz import fuzz, process

from restaurantiq.schemas import Ingredient, MenuItem, Supplier
from restaurantiq.services.errors import DataImportError

logger = logging.getLogger(__name__)

ImportKind = Literal["ingredients", "suppliers", "menu-items"]
ImportedRecord = Union[Ingredient, Supplier, MenuItem]


class ImportTemplate(BaseModel):
    kind: str
    label: str
    columns: List[str]
    description: str


IMPORT_TEMPLATES: Dict[str, ImportTemplate] = {
    "ingredients": ImportTemplate(
        kind="ingredients",
        label="Ingredients",
        columns=["name", "unit", "currentPrice", "previousPrice", "category", "classification"],
        description="Import ingredient items with pricing and classification",
    ),
    "suppliers": ImportTemplate(
        kind="suppliers",
        label="Suppliers",
        columns=["name", "contactInfo", "category"],
        description="Import supplier contact information",
    ),
    "menu-items": ImportTemplate(
        kind="menu-items",
        label="Menu Items",
        columns=["name", "category", "sellingPrice", "description"],
        description="Import menu items with prices",
    ),
}


class ParsedUpload(BaseModel):
    file_name: str
    headers: List[str]
    rows: List[Dict[str, str]]
    # File line of each row; line 1 is the header.
    line_numbers: List[int] = []


class RejectedRow(BaseModel):
    row: int
    reason: str
    values: Dict[str, str] = {}


class ImportResult(BaseModel):
    kind: str
    imported: int
    records: List[ImportedRecord] = []
    rejected: List[RejectedRow] = []
    ignored_rows: int = 0
    column_mapping: Dict[str, Optional[str]] = {}


def get_template(kind: str) -> ImportTemplate:
    try:
        return IMPORT_TEMPLATES[kind]
    except KeyError as exc:
        raise DataImportError(f"Unknown import type '{kind}'") from exc


def template_csv(kind: str) -> str:
    return ",".join(get_template(kind).columns) + "\n"


class ImportFileParser:
    """Read an uploaded CSV or Excel sheet into string rows keyed by header."""

    def __init__(self, filename: str, content_type: Optional[str], payload: bytes) -> None:
        self.filename = filename
        self.content_type = (content_type or "").lower()
        self.payload = payload

    def parse(self) -> ParsedUpload:
        if not self.payload or not self.payload.strip():
            raise DataImportError("The uploaded file is empty.")
        suffix = Path(self.filename).suffix.lower()
        if suffix == ".xlsx" or "spreadsheetml" in self.content_type:
            frame = self._read_excel()
        else:
            frame = self._read_csv(sep="\t" if suffix == ".tsv" else ",")
        return self._from_dataframe(frame)

    def _read_csv(self, sep: str) -> pd.DataFrame:
        try:
            frame = pd.read_csv(
                io.BytesIO(self.payload),
                sep=sep,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=False,
            )
        except pd.errors.EmptyDataError as exc:
            raise DataImportError("No data rows found in the file.") from exc
        except (pd.errors.ParserError, UnicodeDecodeError) as exc:
            raise DataImportError("Could not read the file. Ensure it is a valid CSV.") from exc
        return frame.fillna("")

    def _read_excel(self) -> pd.DataFrame:
        try:
            frame = pd.read_excel(io.BytesIO(self.payload), engine="openpyxl", dtype=str)
        except ValueError as exc:
            raise DataImportError("Could not read this Excel file. Export it as .xlsx or .csv.") from exc
        except Exception as exc:  # openpyxl raises zipfile/KeyError variants on corrupt input
            raise DataImportError("Could not read this Excel file.") from exc
        return frame.fillna("")

    def _from_dataframe(self, frame: pd.DataFrame) -> ParsedUpload:
        headers = [str(column).strip() for column in frame.columns]
        frame.columns = headers
        rows: List[Dict[str, str]] = []
        line_numbers: List[int] = []
        for position, record in enumerate(frame.to_dict(orient="records")):
            row = {header: str(value).strip() for header, value in record.items()}
            if any(row.values()):
                rows.append(row)
                line_numbers.append(position + 2)
        if not rows:
            raise DataImportError("No data rows found in the file.")
        return ParsedUpload(file_name=self.filename, headers=headers, rows=rows, line_numbers=line_numbers)


def parse_upload(filename: str, content_type: Optional[str], payload: bytes) -> ParsedUpload:
    return ImportFileParser(filename or "import.csv", content_type, payload).parse()


def _normalize_header(value: str) -> str:
    return re.sub(r"[_\s]", "", str(value).lower())


def auto_map_columns(
    kind: str,
    headers: Sequence[str],
    threshold: int = 85,
    overrides: Optional[Mapping[str, Optional[str]]] = None,
) -> Dict[str, Optional[str]]:
    """Map each template column to a file header.

    Exact matches (ignoring case, spaces and underscores) win; remaining
    columns fall back to the closest unused header scoring at least
    ``threshold``. Explicit ``overrides`` replace whatever was detected.
    """

    columns = get_template(kind).columns
    normalized = {header: _normalize_header(header) for header in headers}
    mapping: Dict[str, Optional[str]] = {column: None for column in columns}
    used: set = set()

    for column in columns:
        target = _normalize_header(column)
        match = next((header for header, value in normalized.items() if value == target and header not in used), None)
        if match is not None:
            mapping[column] = match
            used.add(match)

    for column in columns:
        if mapping[column] is not None:
            continue
        choices = {header: value for header, value in normalized.items() if header not in used}
        if not choices:
            break
        best = process.extractOne(
            _normalize_header(column),
            choices,
            scorer=fuzz.WRatio,
            score_cutoff=threshold,
        )
        if best is not None:
            _, _, header = best
            mapping[column] = header
            used.add(header)

    for column, header in (overrides or {}).items():
        if column not in mapping:
            raise DataImportError(f"'{column}' is not a {kind} column")
        if header is not None and header not in normalized:
            raise DataImportError(f"Column '{header}' is not in the uploaded file")
        mapping[column] = header or None
    return mapping


def _parse_number(value: str, field: str) -> float:
    cleaned = re.sub(r"[£$€,\s]", "", value)
    try:
        number = float(cleaned)
    except ValueError as exc:
        raise ValueError(f"{field}: '{value}' is not a number") from exc
    if not math.isfinite(number):
        raise ValueError(f"{field}: '{value}' is not a finite number")
    return number


class _RowReader:
    """Mapped view of one raw row with the alias columns the API also accepts."""

    def __init__(self, row: Mapping[str, str], mapping: Mapping[str, Optional[str]]) -> None:
        self.values: Dict[str, str] = {}
        for column, header in mapping.items():
            if header and row.get(header, ""):
                self.values[column] = row[header]
        self._raw = {_normalize_header(header): value for header, value in row.items() if value}

    def get(self, column: str, alias: Optional[str] = None) -> str:
        value = self.values.get(column, "")
        if not value and alias:
            value = self._raw.get(_normalize_header(alias), "")
        return value


def _ingredient(reader: _RowReader, restaurant_id: int) -> Ingredient:
    previous = reader.get("previousPrice")
    return Ingredient(
        restaurant_id=restaurant_id,
        name=reader.get("name"),
        unit=reader.get("unit") or "kg",
        current_price=_parse_number(reader.get("currentPrice", "price") or "0", "currentPrice"),
        previous_price=_parse_number(previous, "previousPrice") if previous else None,
        category=reader.get("category") or "general",
        classification=reader.get("classification").lower() or "direct",
    )


def _supplier(reader: _RowReader, restaurant_id: int) -> Supplier:
    return Supplier(
        restaurant_id=restaurant_id,
        name=reader.get("name"),
        contact_info=reader.get("contactInfo", "contact") or None,
        category=reader.get("category") or "general",
        is_active=True,
    )


def _menu_item(reader: _RowReader, restaurant_id: int) -> MenuItem:
    return MenuItem(
        restaurant_id=restaurant_id,
        name=reader.get("name"),
        category=reader.get("category") or "main",
        selling_price=_parse_number(reader.get("sellingPrice", "price") or "0", "sellingPrice"),
        description=reader.get("description") or None,
        is_active=True,
    )


_BUILDERS = {
    "ingredients": _ingredient,
    "suppliers": _supplier,
    "menu-items": _menu_item,
}


def _describe(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        return "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
    return str(exc)


def build_import(
    kind: str,
    rows: Sequence[Mapping[str, str]],
    mapping: Mapping[str, Optional[str]],
    restaurant_id: int,
    max_rows: int = 500,
    line_numbers: Optional[Sequence[int]] = None,
) -> ImportResult:
    """Turn mapped rows into records, collecting rejections instead of failing.

    ``line_numbers`` gives the file line of each row; without it rows are
    assumed to follow the header with no gaps.
    """

    get_template(kind)
    builder = _BUILDERS[kind]

    records: List[ImportedRecord] = []
    rejected: List[RejectedRow] = []
    for index, row in enumerate(rows[:max_rows]):
        line_number = line_numbers[index] if line_numbers is not None else index + 2
        reader = _RowReader(row, mapping)
        if not reader.values:
            continue
        try:
            records.append(builder(reader, restaurant_id))
        except (ValidationError, ValueError) as exc:
            rejected.append(RejectedRow(row=line_number, reason=_describe(exc), values=reader.values))

    ignored = max(len(rows) - max_rows, 0)
    logger.info(
        "Import %s: %d accepted, %d rejected, %d ignored beyond the row limit",
        kind,
        len(records),
        len(rejected),
        ignored,
    )
    return ImportResult(
        kind=kind,
        imported=len(records),
        records=records,
        rejected=rejected,
        ignored_rows=ignored,
        column_mapping=dict(mapping),
    )


__all__ = [
    "IMPORT_TEMPLATES",
    "ImportFileParser",
    "ImportKind",
    "ImportResult",
    "ImportTemplate",
    "ParsedUpload",
    "RejectedRow",
    "auto_map_columns",
    "build_import",
    "get_template",
    "parse_upload",
    "template_csv",
]
