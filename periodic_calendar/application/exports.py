"""
Report renderers (CSV / TXT) and CSV import parsing.

Renderers only format rows produced by application.reports; they never
compute occurrences themselves.
"""
import csv
import io
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from periodic_calendar.application.reports import RegisterRow, ScheduleRow, YearlyRow
from periodic_calendar.domain.frequency import MAX_SCHEDULE_SLOTS
from periodic_calendar.utils.validation import normalize_decimal_input, validate_decimal_amount

DISPLAY_DATE_FORMAT = "%d/%m/%Y"
TXT_WIDTH = 80

REGISTER_HEADER = ["S. No.", "Date", "Title / Description", "Frequency"]
YEARLY_HEADER = ["S. No.", "Date", "Title", "Frequency"]
SCHEDULE_HEADER = (
    ["S. No.", "Title", "Frequency", "Last Done"]
    + [f"Next {i}" for i in range(1, MAX_SCHEDULE_SLOTS + 1)]
    + ["Count"]
)


class ImportParseError(ValueError):
    pass


@dataclass(frozen=True)
class ImportRow:
    title: str
    start_date: date
    description: str | None = None
    amount: Decimal | None = None


def _fmt(d: date | None) -> str:
    return d.strftime(DISPLAY_DATE_FORMAT) if d is not None else ""


def _csv_text(header: list[str], rows: Iterable[list]) -> str:
    """Header unquoted, text cells quoted, numbers bare."""
    buf = io.StringIO()
    csv.writer(buf, lineterminator="\n").writerow(header)
    csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n").writerows(rows)
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Daily register
# ---------------------------------------------------------------------------

def render_register_csv(rows: list[RegisterRow], include_status: bool = False) -> str:
    header = REGISTER_HEADER + (["Status"] if include_status else [])
    body = []
    for r in rows:
        cells = [r.serial, _fmt(r.date), r.titles, r.frequencies]
        if include_status:
            cells.append(r.statuses)
        body.append(cells)
    return _csv_text(header, body)


def render_register_txt(rows: list[RegisterRow], month_title: str, include_status: bool = False) -> str:
    separator = "=" * TXT_WIDTH + "\n"
    divider = "-" * TXT_WIDTH + "\n"
    column_header = "S. No.  |  Date        |  " + "Title / Description".ljust(45) + "  |  Frequency"
    if include_status:
        column_header = column_header.ljust(len(column_header) + 9) + "  |  Status"

    lines = [f"MONTH - {month_title}\n\n", separator, column_header + "\n", divider]
    for r in rows:
        line = f"{str(r.serial).ljust(6)}  |  {_fmt(r.date).ljust(12)}  |  {r.titles.ljust(45)}  |  "
        if include_status:
            line += f"{r.frequencies.ljust(18)}  |  {r.statuses}"
        else:
            line += r.frequencies
        lines.append(line + "\n")
    lines.append(separator)
    return "".join(lines)


# ---------------------------------------------------------------------------
# Yearly register / equipment schedule
# ---------------------------------------------------------------------------

def render_yearly_csv(rows: list[YearlyRow]) -> str:
    return _csv_text(YEARLY_HEADER, ([r.serial, _fmt(r.date), r.title, r.frequency] for r in rows))


def render_schedule_csv(rows: list[ScheduleRow]) -> str:
    body = []
    for r in rows:
        slots = [_fmt(d) for d in r.within]
        slots += [""] * (MAX_SCHEDULE_SLOTS - len(slots))
        body.append([r.serial, r.title, r.frequency, _fmt(r.last_before), *slots, r.occurrence_count])
    return _csv_text(SCHEDULE_HEADER, body)


def report_filename(kind: str, period_title: str, ext: str) -> str:
    """report_filename("Monthly_Report", "March 2024", "csv") -> "Monthly_Report_March_2024.csv" """
    return f"{kind}_{period_title.replace(' ', '_')}.{ext}"


# ---------------------------------------------------------------------------
# CSV import
# ---------------------------------------------------------------------------

def _find_column(headers: list[str], *needles: str, skip: int | None = None) -> int | None:
    for idx, h in enumerate(headers):
        if idx != skip and any(n in h for n in needles):
            return idx
    return None


def _cell(values: list[str], idx: int | None) -> str:
    if idx is None or idx >= len(values):
        return ""
    return values[idx].strip()


def _parse_import_amount(raw: str) -> Decimal | None:
    """Same rules as typed input (comma or dot, at most 2 decimals); anything else is left empty."""
    if not raw:
        return None
    is_valid, _ = validate_decimal_amount(raw)
    if not is_valid:
        return None
    return Decimal(normalize_decimal_input(raw))


def parse_import_csv(text: str, default_start: date) -> list[ImportRow]:
    """Parse entries from CSV text with a header row.

    Columns are found by substring: title/name (required), desc,
    amount/value, date. Rows without a title are skipped; a missing date
    becomes default_start; an unreadable amount is left empty.

    Raises ImportParseError when the file has no data rows or no title column.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) < 2:
        raise ImportParseError("File must contain header row and at least one data row")

    records = list(csv.reader(lines))
    headers = [h.strip().lower() for h in records[0]]
    title_idx = _find_column(headers, "title", "name")
    if title_idx is None:
        raise ImportParseError('CSV must have a "title" or "name" column')
    desc_idx = _find_column(headers, "desc", skip=title_idx)
    amount_idx = _find_column(headers, "amount", "value")
    date_idx = _find_column(headers, "date")

    rows: list[ImportRow] = []
    for line_no, values in enumerate(records[1:], start=2):
        title = _cell(values, title_idx)
        if not title:
            continue
        raw_date = _cell(values, date_idx)
        try:
            start = date.fromisoformat(raw_date) if raw_date else default_start
        except ValueError:
            raise ImportParseError(f"Line {line_no}: invalid date {raw_date!r}") from None
        rows.append(ImportRow(
            title=title,
            start_date=start,
            description=_cell(values, desc_idx) or None,
            amount=_parse_import_amount(_cell(values, amount_idx)),
        ))

    if not rows:
        raise ImportParseError("No valid data rows found")
    return rows
