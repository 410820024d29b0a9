"""Command-line interface for silent-architect."""

import argparse
import logging
import os
import sys
from pathlib import Path

from schemas.issue import DailyIssue
from silent_architect.archive import ArchiveStore, JsonFileStorage
from silent_architect.clients import AirtableClient, VaultClient
from silent_architect.clients.airtable_client import (
    DEFAULT_AIRTABLE_BASE_URL,
    DEFAULT_TABLE_NAME,
)
from silent_architect.exporters import EXPORTERS
from silent_architect.generation import CuratorChat, IssueGenerator
from silent_architect.generation.generator import DEFAULT_MODEL
from silent_architect.vault import Reconciler, VaultAdapter

DEFAULT_ARCHIVE_PATH = Path("./workspace/archive.json")
DEFAULT_EXPORT_DIR = Path("./workspace/exports")
USER_AGENT = "silent-architect/0.1"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def open_store(args: argparse.Namespace) -> ArchiveStore:
    """Open the local archive named by --archive."""
    return ArchiveStore(JsonFileStorage(args.archive))


def vault_config(args: argparse.Namespace) -> dict:
    """Build the VaultClient config from CLI arguments."""
    return {
        "base_url": args.vault_url,
        "headers": {"User-Agent": USER_AGENT},
    }


def format_issue_line(issue: DailyIssue) -> str:
    return f"{issue.date} | {issue.theme} | {len(issue.articles)} articles"


def sync_vault(args: argparse.Namespace) -> int:
    """Execute the sync command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if not args.vault_url:
        logger.error("No Vault URL configured (use --vault-url or TSA_VAULT_URL)")
        return 1

    store = open_store(args)
    with VaultClient(vault_config(args)) as client:
        report = Reconciler(VaultAdapter(client), store).reconcile()

    if not report.success:
        logger.error(f"Vault sync failed: {report.reason}")
        return 1

    logger.info(f"Pulled {report.pulled} issues, merged {report.saved}")
    logger.info(f"  Archive: {len(store)} issues at {args.archive}")
    return 0


def _open_archive(args: argparse.Namespace) -> ArchiveStore:
    """Open the archive, refreshing it from the Vault when --sync is given."""
    logger = logging.getLogger(__name__)
    store = open_store(args)

    if args.sync:
        if not args.vault_url:
            logger.warning("No Vault URL configured, showing local archive only")
        else:
            with VaultClient(vault_config(args)) as client:
                report = Reconciler(VaultAdapter(client), store).reconcile()
            if not report.success:
                logger.warning(f"Vault unreachable, showing local archive: {report.reason}")

    return store


def list_archive(args: argparse.Namespace) -> int:
    """Execute the list command."""
    setup_logging(args.verbose)

    store = _open_archive(args)
    for issue in store.get_all():
        print(format_issue_line(issue))
    return 0


def search_archive(args: argparse.Namespace) -> int:
    """Execute the search command."""
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    store = _open_archive(args)
    results = store.search(args.query)
    for issue in results:
        print(format_issue_line(issue))

    logger.info(f"{len(results)} issues match '{args.query}'")
    return 0


def push_issues(args: argparse.Namespace) -> int:
    """Execute the push command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    store = open_store(args)
    if args.all:
        issues = store.get_all()
    else:
        latest = store.latest()
        issues = [latest] if latest is not None else []

    if not issues:
        logger.error("Archive is empty, nothing to push")
        return 1

    if not args.vault_url and not args.airtable:
        logger.error("No Vault URL configured (use --vault-url or TSA_VAULT_URL)")
        return 1

    ok = True
    if args.vault_url:
        with VaultClient(vault_config(args)) as client:
            outcome = VaultAdapter(client).push(issues)
        logger.info(outcome.message)
        ok = ok and outcome.success

    if args.airtable:
        config = {
            "base_url": DEFAULT_AIRTABLE_BASE_URL,
            "api_key": os.environ.get("AIRTABLE_API_KEY", ""),
            "base_id": os.environ.get("AIRTABLE_BASE_ID", ""),
            "table_name": os.environ.get("AIRTABLE_TABLE_NAME", DEFAULT_TABLE_NAME),
        }
        with AirtableClient(config) as client:
            for issue in issues:
                ok = client.save_issue(issue) and ok

    return 0 if ok else 1


def generate_issue(args: argparse.Namespace) -> int:
    """Execute the generate command.

    Runs a best-effort Vault sync, generates a new issue, stores it, and
    pushes it to the Vault.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    store = open_store(args)
    generator = IssueGenerator({"api_key": args.api_key, "model": args.model})

    if args.vault_url:
        with VaultClient(vault_config(args)) as client:
            reconciler = Reconciler(VaultAdapter(client), store)
            reconciler.background_sync()
            result = reconciler.generate(generator)
        issue = result.issue
        if result.push is not None:
            logger.info(result.push.message)
    else:
        logger.warning("No Vault URL configured, the issue is stored locally only")
        issue = generator.generate()
        if issue is not None:
            store.save(issue)

    if issue is None:
        logger.error("Failed to generate an issue")
        return 1

    logger.info(f"Generated issue: {issue.date}")
    logger.info(f"  Theme: {issue.theme}")
    logger.info(f"  Articles: {len(issue.articles)}")
    return 0


def export_issue(args: argparse.Namespace) -> int:
    """Execute the export command."""
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    store = open_store(args)
    if args.date and args.theme:
        issue = store.get(args.date, args.theme)
    elif args.date:
        issue = next((i for i in store.get_all() if i.date == args.date), None)
    else:
        issue = store.latest()

    if issue is None:
        logger.error("No matching issue in the archive")
        return 1

    exporter = EXPORTERS[args.format]()
    if not exporter.export(issue, args.output):
        return 1

    logger.info(f"  Output: {exporter.output_path(issue, args.output)}")
    return 0


def chat(args: argparse.Namespace) -> int:
    """Execute the chat command.

    Sends each --message in turn, or reads messages from stdin until EOF or
    an empty line when none are given.
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if not args.api_key:
        logger.error("No Gemini API key configured (set GEMINI_API_KEY)")
        return 1

    store = open_store(args)
    curator = CuratorChat(store.get_all(), api_key=args.api_key, model=args.model)

    try:
        greeting = curator.start()
    except Exception as e:
        logger.error(f"Failed to start curator chat: {e}")
        return 1
    print(greeting.text)

    messages = args.message or _read_stdin_messages()
    for message in messages:
        reply = curator.send(message)
        if reply is not None:
            print(reply.text)
    return 0


def _read_stdin_messages():
    for line in sys.stdin:
        line = line.strip()
        if not line:
            return
        yield line


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="silent-architect",
        description="Generate, archive and synchronise The Silent Architect daily issues",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--archive",
        type=Path,
        default=Path(os.environ.get("TSA_ARCHIVE_PATH") or DEFAULT_ARCHIVE_PATH),
        help=f"Local archive file (default: {DEFAULT_ARCHIVE_PATH})",
    )
    parser.add_argument(
        "--vault-url",
        type=str,
        default=os.environ.get("TSA_VAULT_URL", ""),
        help="Vault endpoint URL (default: $TSA_VAULT_URL)",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    sync_parser = subparsers.add_parser(
        "sync",
        help="Pull issues from the Vault and merge them into the archive",
    )
    sync_parser.set_defaults(func=sync_vault)

    list_parser = subparsers.add_parser(
        "list",
        help="List archived issues, most recent first",
    )
    list_parser.add_argument(
        "--sync",
        action="store_true",
        help="Refresh the archive from the Vault first",
    )
    list_parser.set_defaults(func=list_archive)

    search_parser = subparsers.add_parser(
        "search",
        help="Search archived issues",
        description="Case-insensitive substring search over issue and article text.",
    )
    search_parser.add_argument("query", help="Text to search for")
    search_parser.add_argument(
        "--sync",
        action="store_true",
        help="Refresh the archive from the Vault first",
    )
    search_parser.set_defaults(func=search_archive)

    push_parser = subparsers.add_parser(
        "push",
        help="Push the latest issue (or all issues) to the Vault",
    )
    push_parser.add_argument(
        "--all",
        action="store_true",
        help="Push every archived issue instead of the latest one",
    )
    push_parser.add_argument(
        "--airtable",
        action="store_true",
        help="Also store the issues in Airtable (uses AIRTABLE_* environment variables)",
    )
    push_parser.set_defaults(func=push_issues)

    for name, func, help_text in (
        ("generate", generate_issue, "Generate a new issue, archive it and push it to the Vault"),
        ("chat", chat, "Chat with the curator about the archive"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--model",
            type=str,
            default=DEFAULT_MODEL,
            help=f"Gemini model (default: {DEFAULT_MODEL})",
        )
        sub.add_argument(
            "--api-key",
            type=str,
            default=os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY", ""),
            help="Gemini API key (default: $GEMINI_API_KEY)",
        )
        if name == "chat":
            sub.add_argument(
                "--message",
                action="append",
                help="Message to send (repeatable); reads stdin when omitted",
            )
        sub.set_defaults(func=func)

    export_parser = subparsers.add_parser(
        "export",
        help="Export an archived issue for downstream tools",
    )
    export_parser.add_argument(
        "--format",
        choices=sorted(EXPORTERS),
        required=True,
        help="rag: JSON dataset for vector stores; notebook: NotebookLM text source",
    )
    export_parser.add_argument("--date", type=str, help="Issue date (default: latest)")
    export_parser.add_argument("--theme", type=str, help="Issue theme")
    export_parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_EXPORT_DIR,
        help=f"Output directory (default: {DEFAULT_EXPORT_DIR})",
    )
    export_parser.set_defaults(func=export_issue)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
