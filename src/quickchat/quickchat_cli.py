#!/usr/bin/env python3
"""
QuickChat-CLI - Command Line Interface
Interactive terminal front-end for registering, logging in and chatting
between local accounts, with rich terminal feedback.
"""

import argparse
import logging
import shlex
import sys
from typing import Callable, Dict, List, Optional

from quickchat.config import (
    APP_NAME, APP_VERSION, APP_DESCRIPTION, DEFAULT_MESSAGES_FILE, DEMO_ACCOUNT,
    ERROR_MESSAGES, LOG_DATE_FORMAT, SUCCESS_MESSAGES
)
from quickchat.core.models import Account, OperationResult
from quickchat.directory import Directory
from quickchat.operations.message_log import MessageLog
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape
from rich import box


console = Console()


class ConsoleUI:
    """Rich-based rendering for the shell."""

    def __init__(self, out: Optional[Console] = None):
        self.console = out or console

    def print_banner(self):
        self.console.print(Panel.fit(f"[bold cyan]{APP_NAME}[/] CLI v{APP_VERSION}\n[dim]{APP_DESCRIPTION}[/]", border_style="cyan"))

    def print_result(self, result: OperationResult):
        if result.ok:
            self.console.print(f"[green]✅ {escape(result.message)}[/]")
        elif result.error == "persistence":
            self.console.print(f"[yellow]⚠️  {escape(result.message)}[/]")
        else:
            self.console.print(f"[red]❌ {escape(result.message)}[/]")

    def print_inbox(self, directory: Directory):
        messages = directory.get_messages_for_current_session()
        if not messages:
            self.console.print(f"[dim]{SUCCESS_MESSAGES['no_messages']}[/]")
            return
        table = Table(title="Messages", box=box.SIMPLE_HEAD)
        table.add_column("#", justify="right")
        table.add_column("From")
        table.add_column("To")
        table.add_column("Message", overflow="fold")
        table.add_column("Status")
        table.add_column("When")
        for i, msg in enumerate(messages, 1):
            table.add_row(
                str(i),
                escape(_sender_label(directory, msg.sender_phone)),
                msg.recipient_phone,
                escape(msg.payload),
                msg.status.label,
                msg.created_at.strftime(LOG_DATE_FORMAT),
            )
        self.console.print(table)

    def print_contacts(self, accounts: List[Account]):
        if not accounts:
            self.console.print("[dim]No other registered accounts.[/]")
            return
        table = Table(title="Contacts", box=box.SIMPLE_HEAD)
        table.add_column("Phone", style="bold")
        table.add_column("Username")
        table.add_column("Name")
        for account in accounts:
            table.add_row(account.phone_number, escape(account.username), escape(account.display_name))
        self.console.print(table)

    def print_history(self, records: List[Dict]):
        if not records:
            self.console.print("[dim]No stored messages.[/]")
            return
        table = Table(title="Stored Messages", box=box.SIMPLE_HEAD)
        table.add_column("ID")
        table.add_column("Hash")
        table.add_column("From")
        table.add_column("To")
        table.add_column("Message", overflow="fold")
        table.add_column("Status")
        table.add_column("When")
        for rec in records:
            table.add_row(
                str(rec.get('messageId', '')),
                str(rec.get('messageHash', '')),
                escape(str(rec.get('sender', ''))),
                escape(str(rec.get('recipient', ''))),
                escape(str(rec.get('message', ''))),
                str(rec.get('status', '')),
                str(rec.get('timestamp', '')),
            )
        self.console.print(table)


def _sender_label(directory: Directory, phone_number: str) -> str:
    account = directory.find_account(phone_number)
    return account.username if account is not None else phone_number


class ChatShell:
    """Parses command lines and calls the Directory directly."""

    COMMANDS = {
        'register': "register <username> <password> <first name> <last name> <phone>",
        'login': "login <username> <password>",
        'logout': "logout",
        'send': "send <phone> <message...>",
        'inbox': "inbox",
        'contacts': "contacts",
        'whoami': "whoami",
        'history': "history",
        'stats': "stats",
        'help': "help",
        'quit': "quit",
    }

    def __init__(self, directory: Directory, message_log: Optional[MessageLog] = None,
                 ui: Optional[ConsoleUI] = None):
        self.directory = directory
        self.message_log = message_log
        self.ui = ui or ConsoleUI()
        self._handlers: Dict[str, Callable[[List[str]], bool]] = {
            'register': self._register,
            'login': self._login,
            'logout': self._logout,
            'send': self._send,
            'inbox': self._inbox,
            'contacts': self._contacts,
            'whoami': self._whoami,
            'history': self._history,
            'stats': self._stats,
            'help': self._help,
            'quit': self._quit,
            'exit': self._quit,
        }

    def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the shell should exit."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.ui.console.print(f"[red]❌ {escape(str(e))}[/]")
            return True
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]
        handler = self._handlers.get(command)
        if handler is None:
            self.ui.console.print(f"[red]{escape(ERROR_MESSAGES['unknown_command'].format(command=command))}[/]")
            return True
        return handler(args)

    def run(self) -> int:
        while True:
            try:
                prompt = self._prompt()
                line = self.ui.console.input(prompt)
            except EOFError:
                return 0
            except KeyboardInterrupt:
                self.ui.console.print(f"\n{ERROR_MESSAGES['interrupted']}")
                return 130
            if not self.handle(line):
                return 0

    def _prompt(self) -> str:
        current = self.directory.current_session
        who = current.username if current is not None else "guest"
        return f"[bold cyan]{escape(who)}[/]> "

    def _usage(self, command: str) -> bool:
        self.ui.console.print(f"[yellow]{ERROR_MESSAGES['usage'].format(usage=self.COMMANDS[command])}[/]")
        return True

    def _register(self, args: List[str]) -> bool:
        if len(args) != 5:
            return self._usage('register')
        self.ui.print_result(self.directory.register(*args))
        return True

    def _login(self, args: List[str]) -> bool:
        if len(args) != 2:
            return self._usage('login')
        self.ui.print_result(self.directory.login(*args))
        return True

    def _logout(self, args: List[str]) -> bool:
        self.ui.print_result(self.directory.logout())
        return True

    def _send(self, args: List[str]) -> bool:
        if len(args) < 2:
            return self._usage('send')
        result = self.directory.send(args[0], ' '.join(args[1:]))
        self.ui.print_result(result)
        if result.record is not None:
            self.ui.console.print(f"[dim]{escape(result.record.details())}[/]")
        return True

    def _inbox(self, args: List[str]) -> bool:
        if self.directory.current_session is None:
            self.ui.console.print(f"[red]❌ {ERROR_MESSAGES['not_logged_in']}[/]")
            return True
        self.ui.print_inbox(self.directory)
        return True

    def _contacts(self, args: List[str]) -> bool:
        self.ui.print_contacts(self.directory.list_other_accounts())
        return True

    def _whoami(self, args: List[str]) -> bool:
        current = self.directory.current_session
        if current is None:
            self.ui.console.print(f"[dim]{ERROR_MESSAGES['not_logged_in']}[/]")
        else:
            self.ui.console.print(escape(f"{current.username} ({current.display_name}, {current.phone_number})"))
        return True

    def _history(self, args: List[str]) -> bool:
        if self.message_log is None:
            self.ui.console.print("[dim]No message log configured.[/]")
            return True
        try:
            records = self.message_log.read_records()
        except OSError as e:
            self.ui.console.print(f"[red]❌ Could not read {escape(self.message_log.filepath)}: {escape(str(e))}[/]")
            return True
        self.ui.print_history(records)
        return True

    def _stats(self, args: List[str]) -> bool:
        counters = self.directory.counters
        self.ui.console.print(
            f"Accounts: [bold]{len(self.directory.accounts)}[/] | "
            f"Messages created: [bold]{counters.created}[/] | Sent: [bold green]{counters.sent}[/]"
        )
        return True

    def _help(self, args: List[str]) -> bool:
        table = Table(title="Commands", box=box.SIMPLE_HEAD)
        table.add_column("Usage", style="bold")
        for usage in self.COMMANDS.values():
            table.add_row(usage)
        self.ui.console.print(table)
        return True

    def _quit(self, args: List[str]) -> bool:
        return False


def setup_logging(verbose: bool = False):
    """Setup logging configuration.
    Default to WARNING so log lines don't interleave with the prompt. Use --verbose for DEBUG.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=verbose,
        rich_tracebacks=verbose,
        markup=False,
        log_time_format=f"[{LOG_DATE_FORMAT}]",
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def create_argument_parser():
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description=f"{APP_NAME} CLI - {APP_DESCRIPTION}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start an interactive session (demo account admin / Pass123! is available)
  %(prog)s

  # Keep the message log somewhere else
  %(prog)s --messages-file ~/.quickchat/messages.json

  # Print stored messages and exit
  %(prog)s --history
        """
    )

    parser.add_argument("--messages-file", "-m", default=DEFAULT_MESSAGES_FILE,
                        help=f"JSON-lines file that sent messages are appended to (default: {DEFAULT_MESSAGES_FILE})")
    parser.add_argument("--no-demo", action="store_true", help="Don't seed the demo account")
    parser.add_argument("--no-banner", action="store_true", help="Don't show application banner")
    parser.add_argument("--history", action="store_true", help="Show stored messages and exit")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} CLI v{APP_VERSION}")

    return parser


def build_directory(message_log: MessageLog, seed_demo: bool = True) -> Directory:
    directory = Directory(message_log=message_log)
    if seed_demo:
        directory.seed_account(Account(**DEMO_ACCOUNT))
    return directory


def main(argv: Optional[List[str]] = None):
    """Main function."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    message_log = MessageLog(args.messages_file)
    ui = ConsoleUI()

    try:
        if args.history:
            ui.print_history(message_log.read_records())
            return 0

        if not args.no_banner:
            ui.print_banner()
            console.print("Type [bold]help[/] for a list of commands.")

        shell = ChatShell(build_directory(message_log, seed_demo=not args.no_demo), message_log, ui)
        return shell.run()

    except Exception as e:
        console.print(f"❌ Unexpected error: {escape(str(e))}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
