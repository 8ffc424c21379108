#!/usr/bin/env python3
"""
Command line access to the BrAPI programs endpoints.

Usage:
    python main.py programs --page-size 1000
    python main.py programs --all-pages --sort program_name --filter objective=yield
    python main.py program 1
"""

import argparse
import json
import sys

from loguru import logger
from tqdm import tqdm

from breeders.brapi_client import BrAPIClient
from breeders.config_utils import load_environment_config
from breeders.errors import BrAPIError
from breeders.schemas import programs_frame
from breeders.table.engine import ColumnSort, Table, TableState
from breeders.table.program_columns import program_columns, program_row_id


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Browse BrAPI breeding programs")
    parser.add_argument("--base-url", help="BrAPI root URL (defaults to BRAPI_URL)")
    parser.add_argument("--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("programs", help="List programs")
    list_parser.add_argument("--page", type=int, default=None, help="Zero-based page index")
    list_parser.add_argument("--page-size", type=int, default=None, help="Records per page")
    list_parser.add_argument("--all-pages", action="store_true", help="Fetch every page")
    list_parser.add_argument(
        "--filter", action="append", default=[], metavar="COLUMN=VALUE", help="Column filter (repeatable)"
    )
    list_parser.add_argument(
        "--sort", action="append", default=[], metavar="COLUMN[:desc]", help="Sort key (repeatable)"
    )

    detail_parser = subparsers.add_parser("program", help="Show one program")
    detail_parser.add_argument("program_db_id", help="programDbId")

    return parser.parse_args(argv)


def build_state(filters, sorts) -> TableState:
    """
    Turn --filter and --sort arguments into table state.

    Raises:
        ValueError: On a malformed argument, an unknown column, or a column
                    that cannot be filtered or sorted
    """
    columns = Table([], program_columns).columns
    filterable = [column.id for column in columns if column.get_can_filter()]
    sortable = [column.id for column in columns if column.get_can_sort()]

    state = TableState()
    for item in filters:
        column_id, sep, value = item.partition("=")
        if not sep:
            raise ValueError(f"Filter must look like COLUMN=VALUE, got '{item}'")
        if column_id not in filterable:
            raise ValueError(f"Cannot filter on '{column_id}', expected one of {filterable}")
        state.column_filters[column_id] = value
    for item in sorts:
        column_id, _sep, direction = item.partition(":")
        if column_id not in sortable:
            raise ValueError(f"Cannot sort on '{column_id}', expected one of {sortable}")
        if direction not in ("", "asc", "desc"):
            raise ValueError(f"Sort direction must be asc or desc, got '{direction}'")
        state.sorting.append(ColumnSort(column_id, desc=direction == "desc"))
    return state


def fetch_programs(client, args):
    params = {}
    if args.page_size is not None:
        params["pageSize"] = str(args.page_size)

    if not args.all_pages:
        if args.page is not None:
            params["page"] = str(args.page)
        return list(client.programs(params))

    programs = []
    for page in tqdm(client.iter_pages("programs", params), desc="Fetching pages", unit="page"):
        programs.extend(page.data)
    return programs


def show_programs(client, args, state: TableState):
    programs = fetch_programs(client, args)
    table = Table(programs, program_columns, state=state, get_row_id=program_row_id)
    rows = [row.original for row in table.get_row_model()]
    logger.info(f"Showing {len(rows)} of {len(programs)} programs")

    df = programs_frame(rows)
    print(df.to_string(index=False) if len(df) else "No programs found")


def show_program(client, args):
    program = client.program(args.program_db_id)
    print(json.dumps(program.to_wire(), indent=2))


def main(argv=None) -> int:
    """Run the CLI; returns 0 on success, 1 on API errors, 2 on bad arguments."""
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    if args.command == "programs":
        try:
            state = build_state(args.filter, args.sort)
        except ValueError as e:
            logger.error(f"Invalid arguments: {e}")
            return 2

    load_environment_config()
    client = BrAPIClient(base_url=args.base_url, timeout=args.timeout)

    try:
        if args.command == "programs":
            show_programs(client, args, state)
        else:
            show_program(client, args)
    except BrAPIError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
