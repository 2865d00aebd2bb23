# =============================================================================
# FlareMail Application
# =============================================================================
# Wires the state containers together and exposes them on the command line.
#
# AppContext holds one of each:
#   - Repository (store), AccountDirectory + AccountManager (account list)
#   - ImportService (bulk import)
#   - MailboxSession (the one open mailbox view)
#   - NotificationScheduler (the one toast slot)
#   - ClipboardWriter
# and is passed explicitly to whoever needs them; there are no globals.
#
# CLI:
#   flaremail import FILE|-        bulk import from a .txt file or stdin
#   flaremail list                 show one page of the account directory
#   flaremail delete ID [ID ...]   delete one account or several
#   flaremail open ID              open a mailbox and list its messages
#   flaremail open ID --show MAIL  show one message and its attachments
#   flaremail copy ID              copy an account field to the clipboard
#   flaremail attachment ID        save an attachment to a file
#   flaremail check-update TAG     announce a newer release
# =============================================================================

import argparse
import asyncio
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from flaremail import __app_name__, __version__
from flaremail.accounts import AccountDirectory, AccountManager, SelectionSet
from flaremail.clipboard import ClipboardWriter, CommandClipboard, copy_value
from flaremail.config import Config, ConfigError, ensure_directories, print_paths
from flaremail.core import (
    AccountRecord,
    FileAccessError,
    FlareMailError,
    FolderClassifier,
    FolderTag,
    NotFoundError,
)
from flaremail.importer import ImportService
from flaremail.mailbox import MailboxSession, MailSyncBackend, OfflineSyncBackend
from flaremail.mailbox.preview import display_subject, friendly_time, sender_name, snippet
from flaremail.notify import NotificationScheduler, Toast, announce_update, check_for_update
from flaremail.storage import Database, Repository


logger = logging.getLogger(__name__)

# Characters of a message body shown by "open --show"
DETAIL_LENGTH = 4000


@dataclass
class AppContext:
    """Every state container of a running FlareMail instance."""
    config: Config
    db: Database
    repo: Repository
    directory: AccountDirectory
    manager: AccountManager
    notifier: NotificationScheduler
    importer: ImportService
    session: MailboxSession
    clipboard: ClipboardWriter


@asynccontextmanager
async def open_context(
    config: Config,
    db_path: Path | None = None,
    backend: MailSyncBackend | None = None,
    clipboard: ClipboardWriter | None = None,
) -> AsyncIterator[AppContext]:
    """
    Build an AppContext, connect the database, and tear it all down on exit.

    Args:
        config: Loaded configuration.
        db_path: Database file (defaults to the XDG data location).
        backend: Remote sync backend (defaults to OfflineSyncBackend).
        clipboard: Clipboard writer (defaults to CommandClipboard).
    """
    db = Database(db_path)
    await db.connect()

    repo = Repository(db)
    directory = AccountDirectory(
        page_size=config.directory.page_size,
        page_size_options=config.directory.page_size_options,
        selection=SelectionSet(),
    )
    manager = AccountManager(repo, directory)
    notifier = NotificationScheduler(config.notifications.duration_ms)
    importer = ImportService(manager, notifier, separator=config.importing.separator)
    session = MailboxSession(
        backend or OfflineSyncBackend(),
        repo,
        FolderClassifier(config.folders.junk_terms),
        report_sync_failures=config.session.report_sync_failures,
    )

    def on_sync_failure(account: AccountRecord, folder: FolderTag, error: Exception) -> None:
        notifier.show(f"Could not check {account.address}, showing cached mail: {error}")

    session.on_sync_failure = on_sync_failure

    ctx = AppContext(
        config=config,
        db=db,
        repo=repo,
        directory=directory,
        manager=manager,
        notifier=notifier,
        importer=importer,
        session=session,
        clipboard=clipboard or CommandClipboard(),
    )

    try:
        await manager.refresh()
        yield ctx
    finally:
        session.close()
        notifier.close()
        await db.close()


# =============================================================================
# Commands
# =============================================================================

async def cmd_import(ctx: AppContext, args: argparse.Namespace) -> int:
    if args.source == "-":
        outcome = await ctx.importer.import_text(sys.stdin.read(), args.separator)
    else:
        outcome = await ctx.importer.import_file(args.source, args.separator)
    return 0 if outcome.ok else 1


async def cmd_list(ctx: AppContext, args: argparse.Namespace) -> int:
    directory = ctx.directory
    if args.page_size is not None:
        directory.set_page_size(args.page_size)
    if args.search:
        directory.set_query(args.search)
    directory.go_to(args.page)

    if not directory.filtered:
        print("No accounts")
        return 0

    for account in directory.page_items:
        print(
            f"{account.id:>5}  {account.address:<40}  "
            f"{account.client_id:<38}  {account.short_token()}"
        )

    window = " ".join(
        f"[{item}]" if item == directory.current_page else str(item)
        for item in directory.page_window
    )
    print(f"\nPage {directory.current_page}/{directory.total_pages}:  {window}")
    return 0


async def cmd_delete(ctx: AppContext, args: argparse.Namespace) -> int:
    if len(args.ids) == 1:
        await ctx.manager.delete(args.ids[0])
        print(f"Deleted account {args.ids[0]}")
        return 0

    ctx.directory.selection.select_all(args.ids)
    result = await ctx.manager.delete_selected()
    print(f"Deleted {result.success_count} accounts")
    for account_id, error in result.failed.items():
        print(f"  {account_id}: {error}", file=sys.stderr)
    return 0 if not result.failed else 1


async def cmd_open(ctx: AppContext, args: argparse.Namespace) -> int:
    account = await ctx.repo.get_account(args.id)
    if account is None:
        raise NotFoundError(args.id)

    folder = args.folder or ctx.config.session.default_folder
    state = await ctx.session.open(account, folder)
    if state is None:
        return 1

    print(f"{account.address} / {state.folder.value}: {len(state.records)} messages")
    if state.sync_error:
        print(f"Check failed, showing cached mail: {state.sync_error}", file=sys.stderr)
    if state.load_failed:
        print("Could not read the mail cache, see the log for details", file=sys.stderr)

    if args.show is not None:
        try:
            await show_detail(ctx, args.show)
        except LookupError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        finally:
            ctx.session.close()
        return 0

    for record in state.records:
        clip = " [+]" if record.attachments_present else ""
        print(
            f"{record.id:>5}  {friendly_time(record.received_time):>9}  "
            f"{sender_name(record.sender)[:24]:<24}  "
            f"{display_subject(record.subject)}{clip}"
        )
        preview = snippet(record.content)
        if preview:
            print(f"{'':>16}  {preview}")

    ctx.session.close()
    return 0


async def show_detail(ctx: AppContext, record_id: int) -> None:
    """Print one message of the open mailbox with its attachment list."""
    record = ctx.session.view_detail(record_id)
    print(f"From:    {record.sender or '-'}")
    print(f"Date:    {record.received_time or '-'}")
    print(f"Subject: {display_subject(record.subject)}")
    print()
    print(snippet(record.content, length=DETAIL_LENGTH))

    attachments = await ctx.session.detail_attachments()
    if attachments:
        print("\nAttachments:")
        for attachment in attachments:
            print(
                f"{attachment.id:>5}  {attachment.filename or '(unnamed)'}  "
                f"{attachment.content_type or '-'}  {attachment.size or 0} bytes"
            )
    ctx.session.close_detail()


async def cmd_copy(ctx: AppContext, args: argparse.Namespace) -> int:
    account = ctx.directory.get(args.id)
    if account is None:
        raise NotFoundError(args.id)

    if args.field == "address":
        await copy_value(ctx.clipboard, ctx.notifier, account.address)
    elif args.field == "secret":
        await copy_value(ctx.clipboard, ctx.notifier, account.secret, "Secret")
    elif args.field == "client-id":
        await copy_value(ctx.clipboard, ctx.notifier, account.client_id)
    else:
        await copy_value(ctx.clipboard, ctx.notifier, account.refresh_token, account.short_token())
    return 0


async def cmd_attachment(ctx: AppContext, args: argparse.Namespace) -> int:
    attachment = await ctx.repo.get_attachment_content(args.id)
    if attachment is None:
        raise NotFoundError(args.id, "Attachment")

    output = args.output or Path(attachment.display_name())
    try:
        output.write_bytes(attachment.content)
    except OSError as e:
        raise FileAccessError(f"Could not write {output}: {e}") from e

    print(f"Saved {attachment.display_name()} ({len(attachment.content)} bytes) to {output}")
    return 0


def announce_release(ctx: AppContext, latest_tag: str) -> Toast | None:
    """
    Announce latest_tag if it is newer than the running version.

    The toast carries the configured release page as its download link.

    Returns:
        The persistent toast, or None when already up to date.
    """
    info = check_for_update(__version__, latest_tag, ctx.config.updates.release_url)
    if info is None:
        logger.info(f"Up to date: {__version__} >= {latest_tag}")
        return None
    return announce_update(ctx.notifier, info)


async def cmd_check_update(ctx: AppContext, args: argparse.Namespace) -> int:
    toast = announce_release(ctx, args.latest)
    if toast is None:
        print(f"{__app_name__} {__version__} is up to date")
    else:
        print(f"Download: {toast.payload}")
    return 0


COMMANDS = {
    "attachment": cmd_attachment,
    "check-update": cmd_check_update,
    "copy": cmd_copy,
    "import": cmd_import,
    "list": cmd_list,
    "delete": cmd_delete,
    "open": cmd_open,
}


# =============================================================================
# CLI Entry Point
# =============================================================================

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="FlareMail: bulk mail account management",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print configuration paths and exit",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )
    parser.add_argument(
        "--database",
        type=Path,
        help="Path to the database (default: XDG data location)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    sub = parser.add_subparsers(dest="command")

    p_import = sub.add_parser("import", help="Import accounts from a .txt file ('-' for stdin)")
    p_import.add_argument("source", help="Path to a .txt file, or '-' to read stdin")
    p_import.add_argument("--separator", help="Field separator (default from config)")

    p_list = sub.add_parser("list", help="List accounts")
    p_list.add_argument("--search", default="", help="Filter by address")
    p_list.add_argument("--page", type=int, default=1)
    p_list.add_argument("--page-size", type=int)

    p_delete = sub.add_parser("delete", help="Delete accounts by id")
    p_delete.add_argument("ids", type=int, nargs="+")

    p_open = sub.add_parser("open", help="Check a mailbox and list its messages")
    p_open.add_argument("id", type=int)
    p_open.add_argument("--folder", type=str.upper, choices=["INBOX", "JUNK"])
    p_open.add_argument("--show", type=int, metavar="MAIL_ID", help="Show one message and its attachments")

    p_copy = sub.add_parser("copy", help="Copy an account field to the clipboard")
    p_copy.add_argument("id", type=int)
    p_copy.add_argument(
        "--field",
        choices=["address", "secret", "client-id", "token"],
        default="address",
    )

    p_attachment = sub.add_parser("attachment", help="Save an attachment to a file")
    p_attachment.add_argument("id", type=int)
    p_attachment.add_argument("--output", type=Path, help="Target file (default: its file name)")

    p_update = sub.add_parser("check-update", help="Announce a release if it is newer than this version")
    p_update.add_argument("latest", help="Latest release tag, e.g. v0.2.0")

    return parser.parse_args(argv)


def setup_logging(debug: bool) -> None:
    """Log to the state directory; with --debug also to stderr at DEBUG level."""
    ensure_directories()

    handlers: list[logging.Handler] = [
        logging.FileHandler(Config.log_file_path(), encoding="utf-8"),
    ]
    if debug:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )


def print_toast(toast: Toast | None) -> None:
    """Toast listener for the terminal: print each new message once."""
    if toast is not None:
        print(toast.message)


async def run(args: argparse.Namespace, config: Config) -> int:
    async with open_context(config, db_path=args.database) as ctx:
        ctx.notifier.subscribe(print_toast)
        return await COMMANDS[args.command](ctx, args)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for FlareMail.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_args(argv)

    if args.paths:
        print_paths()
        return 0

    if args.command is None:
        print("No command given, see --help", file=sys.stderr)
        return 2

    setup_logging(args.debug)

    try:
        config = Config.load(args.config)
        return asyncio.run(run(args, config))
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1
    except (FlareMailError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
