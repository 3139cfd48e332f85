"""Command line interface for the campaign calendar."""

from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
import sys
from typing import Callable, Iterable, List, Sequence

from .bucketer import bucket_records
from .client import (
    AuthenticationError,
    CalendarClientError,
    CampaignClient,
    Company,
    load_companies_file,
    load_records_file,
)
from .config import CalendarConfig, parse_week_start
from .drilldown import select, summarize
from .grid import DayCell, InvalidMonth, MonthGrid, build_month_grid, weekday_headers
from .navigator import Navigator
from .records import CalendarRecord, DateKey, criteria_for

CELL_WIDTH = 16


def _record_label(record: CalendarRecord) -> str:
    payload = record.payload
    if isinstance(payload, dict):
        name = str(payload.get("name") or "").strip()
        if name:
            return name
    return record.id


def _format_date_key(date_key: DateKey) -> str:
    year, month, day = date_key
    return f"{year:04d}-{month:02d}-{day:02d}"


def _record_company(record: CalendarRecord) -> str:
    payload = record.payload
    if isinstance(payload, dict):
        company = payload.get("companyAccount")
        if isinstance(company, dict):
            return str(company.get("companyName") or "").strip()
    return ""


def _clip(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 1] + "~"


def _cell_lines(cell: DayCell, inline_limit: int) -> List[str]:
    if not cell.in_displayed_month:
        return [f"({cell.day})"]

    header = f"{cell.day}*" if cell.is_today else str(cell.day)
    summary = summarize(cell, inline_limit)
    lines = [header]
    for record in summary.shown:
        lines.append(_clip(_record_label(record), CELL_WIDTH))
        company = _record_company(record)
        if company:
            lines.append(_clip(f"  {company}", CELL_WIDTH))
    if summary.has_overflow:
        lines.append(summary.overflow_label)
    return lines


def _format_grid_text(grid: MonthGrid, inline_limit: int) -> str:
    divider = "+".join("-" * (CELL_WIDTH + 2) for _ in range(7))
    divider = f"+{divider}+"

    header_line = "|".join(
        f" {name[:3].center(CELL_WIDTH)} " for name in weekday_headers(grid.week_start)
    )
    lines = [grid.title.center(len(divider)).rstrip(), divider, f"|{header_line}|", divider]

    for week in grid.weeks:
        columns = [_cell_lines(cell, inline_limit) for cell in week]
        height = max(len(column) for column in columns)
        for row_index in range(height):
            row_line = "|".join(
                f" {(column[row_index] if row_index < len(column) else '').ljust(CELL_WIDTH)} "
                for column in columns
            )
            lines.append(f"|{row_line}|")
        lines.append(divider)
    return "\n".join(lines)


def _cell_payload(cell: DayCell, inline_limit: int) -> dict:
    summary = summarize(cell, inline_limit)
    return {
        "date": _format_date_key(cell.date),
        "in_month": cell.in_displayed_month,
        "today": cell.is_today,
        "records": [record.id for record in cell.records],
        "shown": [record.id for record in summary.shown],
        "overflow": summary.overflow_count,
    }


def _format_grid_json(grid: MonthGrid, inline_limit: int) -> str:
    payload = {
        "year": grid.year,
        "month": grid.month,
        "title": grid.title,
        "weekdays": weekday_headers(grid.week_start),
        "weeks": [[_cell_payload(cell, inline_limit) for cell in week] for week in grid.weeks],
    }
    return json.dumps(payload, indent=2)


def _format_day_text(date_key: DateKey, records: Sequence[CalendarRecord]) -> str:
    label = dt.date(*date_key).strftime("%B %d, %Y")
    if not records:
        return f"No campaigns on {label}."
    lines = [f"Campaigns for {label}:"]
    for record in records:
        lines.append(f"  {record.id}  {_record_label(record)}")
    return "\n".join(lines)


def _format_day_json(date_key: DateKey, records: Sequence[CalendarRecord]) -> str:
    payload = {
        "date": _format_date_key(date_key),
        "records": [
            {"id": record.id, "name": _record_label(record), "entity_id": record.entity_id}
            for record in records
        ],
    }
    return json.dumps(payload, indent=2)


def _format_companies(companies: Sequence[Company], output_format: str) -> str:
    if output_format == "json":
        return json.dumps([{"id": c.id, "name": c.name} for c in companies], indent=2)
    if not companies:
        return "No companies available."
    width = max(len(company.id) for company in companies)
    return "\n".join(f"{company.id.ljust(width)}  {company.name}" for company in companies)


def _build_config(args: argparse.Namespace) -> CalendarConfig:
    base = CalendarConfig.from_env()
    return CalendarConfig(
        inline_limit=base.inline_limit if args.inline_limit is None else args.inline_limit,
        week_start=base.week_start if args.week_start is None else args.week_start,
        timezone=args.timezone or base.timezone,
        api_url=args.api_url or base.api_url,
        token=base.token,
    )


def _load_records(args: argparse.Namespace, config: CalendarConfig) -> List[CalendarRecord]:
    if args.input:
        return load_records_file(args.input)
    return CampaignClient(config.api_url, token=config.token).fetch_campaigns()


def _load_companies(args: argparse.Namespace, config: CalendarConfig) -> List[Company]:
    if args.input:
        return load_companies_file(args.input)
    return CampaignClient(config.api_url, token=config.token).fetch_companies()


def _run_month(args: argparse.Namespace, config: CalendarConfig) -> str:
    navigator = Navigator(args.year, args.month)
    for _ in range(abs(args.offset)):
        if args.offset > 0:
            navigator.next()
        else:
            navigator.previous()

    records = _load_records(args, config)
    buckets = bucket_records(records, criteria_for(args.company), config.tzinfo)
    state = navigator.state
    grid = build_month_grid(buckets, state.year, state.month, dt.date.today(), config.week_start)

    if args.format == "json":
        return _format_grid_json(grid, config.inline_limit)
    return _format_grid_text(grid, config.inline_limit)


def _run_day(args: argparse.Namespace, config: CalendarConfig) -> str:
    day = args.date
    records = _load_records(args, config)
    buckets = bucket_records(records, criteria_for(args.company), config.tzinfo)
    date_key = (day.year, day.month, day.day)
    cell = DayCell(
        date=date_key,
        in_displayed_month=True,
        is_today=day == dt.date.today(),
        records=tuple(buckets.get(date_key, ())),
    )
    day_records = select(cell)

    if args.format == "json":
        return _format_day_json(date_key, day_records)
    return _format_day_text(date_key, day_records)


def _run_companies(args: argparse.Namespace, config: CalendarConfig) -> str:
    return _format_companies(_load_companies(args, config), args.format)


def _parse_date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from exc


def _parse_week_start_arg(value: str) -> int:
    try:
        return parse_week_start(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--input",
        "-i",
        metavar="FILE",
        help="Read campaigns from a JSON export instead of the API",
    )
    common.add_argument(
        "--api-url",
        help=(
            "Base URL of the campaign API. Can also be provided via the "
            "CAMPAIGN_CALENDAR_API_URL environment variable"
        ),
    )
    common.add_argument(
        "--timezone",
        help="Time zone used to assign campaigns to days (default: UTC)",
    )
    common.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    common.add_argument(
        "--output",
        metavar="FILE",
        help="Write the output to FILE instead of standard output",
    )
    common.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(description="Campaign calendar CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    month_parser = subparsers.add_parser("month", parents=[common], help="Show a month grid")
    month_parser.add_argument("--year", type=int, help="Year to display (default: current)")
    month_parser.add_argument("--month", type=int, help="Month to display (default: current)")
    month_parser.add_argument(
        "--offset",
        type=int,
        default=0,
        help="Move this many months forward (or backward if negative) from the chosen month",
    )
    month_parser.add_argument("--company", help="Only show campaigns for this company id")
    month_parser.add_argument(
        "--inline-limit",
        type=int,
        help="Campaigns shown per day before collapsing into '+N more' (default: 3)",
    )
    month_parser.add_argument(
        "--week-start",
        type=_parse_week_start_arg,
        help="First day of the week, as a name or number 0-6 (default: sunday)",
    )
    month_parser.set_defaults(handler=_run_month)

    day_parser = subparsers.add_parser("day", parents=[common], help="List every campaign on a day")
    day_parser.add_argument("date", type=_parse_date, help="Day to list, as YYYY-MM-DD")
    day_parser.add_argument("--company", help="Only show campaigns for this company id")
    day_parser.set_defaults(handler=_run_day, inline_limit=None, week_start=None)

    companies_parser = subparsers.add_parser(
        "companies", parents=[common], help="List companies available as filters"
    )
    companies_parser.set_defaults(handler=_run_companies, inline_limit=None, week_start=None)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        config = _build_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    handler: Callable[[argparse.Namespace, CalendarConfig], str] = args.handler
    try:
        payload = handler(args, config)
    except InvalidMonth as exc:
        parser.error(str(exc))
    except AuthenticationError as exc:
        print(f"Access denied: {exc}", file=sys.stderr)
        return 1
    except CalendarClientError as exc:
        print(f"Unable to load campaigns: {exc}", file=sys.stderr)
        return 2

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as handle:
                handle.write(payload)
                if payload and not payload.endswith("\n"):
                    handle.write("\n")
        except OSError as exc:
            print(f"Failed to write output to {args.output!r}: {exc}", file=sys.stderr)
            return 3
    else:
        print(payload)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual usage
    raise SystemExit(main())
