"""
Command-line interface for recruit-desk.
"""

from __future__ import annotations
import sys
import asyncio
import argparse
from datetime import date

from recruitdesk.config import (
    _init_gmail_sender,
    _init_ledger,
    _init_sheets_exporter,
    _init_source,
    _load_env,
)
from recruitdesk.emails.confirmation import (
    EmailType,
    build_confirmation_email,
    handle_candidate_email,
)
from recruitdesk.logging import logger, setup_logging
from recruitdesk.notifications.alerts import ToastBoard
from recruitdesk.notifications.monitor import InterviewMonitor, day_bounds, local_now
from recruitdesk.service import main as run_service
from recruitdesk.utils.filters import CandidateFilters
from recruitdesk.utils.schedule import summarize_todays_interviews
from recruitdesk.utils.search import search_candidates
from recruitdesk.utils.stats import dashboard_stats, parse_period


def _configure():
    cfg = _load_env()
    setup_logging(log_level=cfg["LOG_LEVEL"], log_file=cfg["LOG_FILE"])
    return cfg


def cmd_monitor(args):
    """Run the monitor service until interrupted."""
    try:
        run_service()
    except Exception as e:
        logger.exception(f"Monitor service failed: {e}")
        sys.exit(1)


async def _check(cfg):
    async with _init_source(cfg) as source:
        monitor = InterviewMonitor(
            source=source,
            ledger=_init_ledger(cfg),
            toasts=ToastBoard(duration_seconds=cfg["TOAST_DURATION_SECONDS"]),
            window_minutes=cfg["ALERT_WINDOW_MINUTES"],
        )
        try:
            return await monitor.tick()
        finally:
            monitor.stop()


def cmd_check(args):
    """Run a single monitor tick and print the alerts it raised."""
    try:
        cfg = _configure()
        alerts = asyncio.run(_check(cfg))
        if not alerts:
            print("No interviews starting soon.")
        for alert in alerts:
            print(alert.title)
            print(alert.body)
            print()
    except Exception as e:
        logger.exception(f"Interview check failed: {e}")
        sys.exit(1)


async def _fetch_today(cfg):
    start, end = day_bounds(local_now())
    async with _init_source(cfg) as source:
        return await source.fetch_interviews_between(start, end)


def cmd_today(args):
    """Print today's interviews ordered by time."""
    try:
        cfg = _configure()
        interviews = summarize_todays_interviews(asyncio.run(_fetch_today(cfg)))
        if not interviews:
            print("No interviews scheduled for today.")
        for item in interviews:
            print(
                f"{item.time:>9}  {item.candidate}  {item.client} / {item.position}  "
                f"[{item.mode}, {item.status1}]  recruiter: {item.recruiter}"
            )
    except Exception as e:
        logger.exception(f"Listing today's interviews failed: {e}")
        sys.exit(1)


async def _fetch_candidates(cfg, search_term: str):
    async with _init_source(cfg) as source:
        return await source.fetch_candidates(search_term)


def cmd_candidates(args):
    """List candidates narrowed by name search, prefix query and filters."""
    try:
        cfg = _configure()
        candidates = asyncio.run(_fetch_candidates(cfg, args.name))

        filters = CandidateFilters()
        for name in ("mode", "status1", "status2", "round", "client_name", "position", "manager"):
            value = getattr(args, name)
            if value:
                filters.change(name, value)
        if args.date:
            filters.change_date(args.date)

        result = search_candidates(filters.apply(candidates), args.search or "")
        logger.info(
            f"{len(result)} of {len(candidates)} candidates match "
            f"({filters.active_count} active filters)"
        )
        for c in result:
            print(f"{c.name:<25} {c.email:<30} {c.client_name:<20} {c.position:<20} {c.status1}")

        if args.export:
            exporter = _init_sheets_exporter(cfg)
            if exporter is None:
                logger.error("Sheets export is not configured (GOOGLE_SHEETS_TOKEN / GOOGLE_SHEET_ID)")
                sys.exit(1)
            exported = exporter.export(
                cfg["SHEET_ID"],
                cfg["EXPORT_WORKSHEET"],
                result,
                timezone=cfg["EXPORT_TIMEZONE"],
            )
            print(f"Exported {exported} candidates to '{cfg['EXPORT_WORKSHEET']}'")
    except Exception as e:
        logger.exception(f"Listing candidates failed: {e}")
        sys.exit(1)


def cmd_stats(args):
    """Print the dashboard statistics, optionally for a recent period."""
    try:
        cfg = _configure()
        days = parse_period(args.period)
        stats = dashboard_stats(asyncio.run(_fetch_candidates(cfg, "")), days=days)
        period = "all time" if days is None else f"last {days} days"
        logger.info(f"Dashboard stats ({period}): {stats.to_dict()}")
        print(f"Total candidates:   {stats.total_candidates}")
        print(f"Not interested:     {stats.not_interested}")
        print(f"Interview pending:  {stats.interview_pending}")
        print(f"Feedback awaited:   {stats.feedback_awaited}")
    except Exception as e:
        logger.exception(f"Loading dashboard statistics failed: {e}")
        sys.exit(1)


async def _get_candidate(cfg, candidate_id: str):
    async with _init_source(cfg) as source:
        return await source.get_candidate(candidate_id)


def cmd_email(args):
    """Send a confirmation/notification email to one candidate."""
    try:
        cfg = _configure()
        sender = _init_gmail_sender(cfg)
        if sender is None:
            logger.error("Email is not configured (GOOGLE_GMAIL_TOKEN)")
            sys.exit(1)

        candidate = asyncio.run(_get_candidate(cfg, args.candidate_id))
        if candidate is None:
            logger.error(f"Candidate {args.candidate_id} not found")
            sys.exit(1)

        if args.type:
            email = build_confirmation_email(candidate, EmailType(args.type), reply_to=cfg["EMAIL_REPLY_TO"])
            sender.send(email.to, email.subject, email.body, reply_to=email.reply_to)
            print(f"Sent '{email.subject}' to {email.to}")
            return

        outcome = handle_candidate_email(sender, candidate, is_new=True, reply_to=cfg["EMAIL_REPLY_TO"])
        print(f"{outcome.message}: {outcome.description}")
        if outcome.variant == "destructive":
            sys.exit(1)
    except Exception as e:
        logger.exception(f"Sending candidate email failed: {e}")
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="recruitdesk",
        description="recruit-desk - interview alerts and candidate lookup for recruiters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s monitor                          Run the interview monitor service
  %(prog)s check                            Run one check and print alerts
  %(prog)s today                            Print today's interviews
  %(prog)s candidates --search ja           Prefix search across candidate fields
  %(prog)s candidates --status1 Confirmed --export
  %(prog)s stats --period 30                Dashboard statistics for the last 30 days
  %(prog)s email 42 --type confirmed        Send a confirmation email
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    monitor_parser = subparsers.add_parser("monitor", help="Run the interview monitor service")
    monitor_parser.set_defaults(func=cmd_monitor)

    check_parser = subparsers.add_parser("check", help="Run a single interview check")
    check_parser.set_defaults(func=cmd_check)

    today_parser = subparsers.add_parser("today", help="List today's interviews")
    today_parser.set_defaults(func=cmd_today)

    cand_parser = subparsers.add_parser("candidates", help="List and filter candidates")
    cand_parser.add_argument("--name", default="", help="Server-side name search (substring)")
    cand_parser.add_argument("--search", default="", help="Prefix search across candidate fields")
    cand_parser.add_argument("--mode", help="Interview mode")
    cand_parser.add_argument("--status1", help="Status 1")
    cand_parser.add_argument("--status2", help="Status 2")
    cand_parser.add_argument("--round", help="Interview round")
    cand_parser.add_argument("--client", dest="client_name", help="Client name")
    cand_parser.add_argument("--position", help="Position")
    cand_parser.add_argument("--manager", help="Manager")
    cand_parser.add_argument("--date", type=date.fromisoformat, help="Interview date (YYYY-MM-DD)")
    cand_parser.add_argument("--export", action="store_true", help="Export the result to Google Sheets")
    cand_parser.set_defaults(func=cmd_candidates)

    stats_parser = subparsers.add_parser("stats", help="Show dashboard statistics")
    stats_parser.add_argument("--period", help="Only candidates created in the last N days (e.g. 30 or 30-entire)")
    stats_parser.set_defaults(func=cmd_stats)

    mail_parser = subparsers.add_parser("email", help="Send an interview email to a candidate")
    mail_parser.add_argument("candidate_id", help="Candidate id")
    mail_parser.add_argument(
        "--type",
        choices=[t.value for t in EmailType],
        help="Email to send; decided from the candidate's status when omitted",
    )
    mail_parser.set_defaults(func=cmd_email)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
