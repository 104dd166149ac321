"""Entry point for `python -m interaction_log_viewer`.

Renders a plain-text session report from an exported interactions file.
"""

import argparse
import logging
import sys

from interaction_log_viewer.services.pagination import compute_window, page_index_from_query
from interaction_log_viewer.services.record_parser import load_interactions_file, load_session_summary_file
from interaction_log_viewer.services.savings_calculator import format_percent
from interaction_log_viewer.services.session_loader import SessionDetail, build_session_view
from interaction_log_viewer.types.pagination import InteractionPage, PaginationMeta

DEFAULT_PAGE_SIZE = 20


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="interaction_log_viewer",
        description="Summarize a session from an exported interactions file.",
    )
    parser.add_argument("export", help="JSON list response, JSON array or JSON Lines file")
    parser.add_argument("--summary", help="session summary JSON file")
    parser.add_argument("--page", default=None, help="1-based page number")
    parser.add_argument("--limit", type=int, default=DEFAULT_PAGE_SIZE, help="rows per page")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.limit < 1:
        print("--limit must be at least 1", file=sys.stderr)
        return 2

    exported = load_interactions_file(args.export)
    page_index = page_index_from_query(args.page)
    window = compute_window(page_index, args.limit, len(exported.data))
    rows = exported.data[window.offset:window.offset + args.limit]

    detail = SessionDetail(
        page=InteractionPage(
            data=rows,
            pagination=PaginationMeta(
                current_page=window.current_page,
                limit=args.limit,
                total=window.total,
                total_pages=window.total_pages,
                has_next=window.has_next,
                has_prev=window.has_prev,
            ),
        ),
        summary=load_session_summary_file(args.summary) if args.summary else None,
    )
    view = build_session_view(detail, page_index, args.limit)
    _print_view(view)
    return 0


def _print_view(view) -> None:
    header = view.header
    print(header.title or "Session")
    if header.is_page_scoped:
        print("(totals computed from this page only)")
    print(f"  Requests:  {header.total_requests}")
    print(f"  Tokens:    {header.total_input_tokens:,} in / {header.total_output_tokens:,} out")
    print(f"  Cost:      {header.total_cost or '-'} (savings {format_percent(header.savings_percent)})")
    print(f"  Models:    {', '.join(header.models) or '-'}")
    if header.first_request:
        print(f"  First:     {header.first_request.isoformat()}")
    if header.last_request:
        print(f"  Last:      {header.last_request.isoformat()}")
    if header.root_interaction:
        print(f"  Root:      {header.root_interaction.id}")
    print()

    if not view.rows:
        print("No interactions found for this session")
        return
    for row in view.rows:
        tools = ", ".join(row.visible_tools) or "—"
        if row.hidden_tool_count:
            tools += f" {row.tool_overflow_label}"
        when = row.created_at.isoformat() if row.created_at else "-"
        savings = format_percent(row.savings.percent)
        if row.savings.skip_reason:
            savings += f" (skipped: {row.savings.skip_reason})"
        print(f"{when}  {row.label:<16} {row.model_name:<24} {savings:<10} {tools:<24} {row.message_preview}")

    window = view.window
    if not window.is_empty:
        print()
        print(
            f"Showing {window.visible_range_start} to {window.visible_range_end} of {window.total} requests"
            f" (page {window.current_page} of {window.total_pages})"
        )


if __name__ == "__main__":
    sys.exit(main())
