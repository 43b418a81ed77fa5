"""Interactive console front end for the link shortener.

This CLI follows this procedure:
- Step 1: Parse CLI arguments and initialize logging
- Step 2: Load settings from the configuration file
- Step 3: Wire the in-memory DAO, console notifications and the link service
- Step 4: Start the background expiration sweeper
- Step 5: Read and dispatch commands until `exit` or end of input

CLI usage:
    $ python -m linkshortener
    $ python -m linkshortener --config config/local.yml --log-level INFO

Commands:
    new                   create a new owner id and switch to it
    login ID              switch to an existing owner id
    shorten [URL]         shorten a link
    open [CODE]           resolve a shortcode and open it in the browser
    my                    list your links
    edit CODE [LIMIT]     change the click limit of a link
    extend CODE [DAYS]    extend the lifetime of a link
    delete CODE           delete a link
    stats                 show statistics of your links
    help                  show this help
    exit                  quit

Raises:
    MissingConfigurationError / BadConfigurationError: on startup when the
    configuration can't be loaded.
"""

import sys
import uuid
import logging
import argparse
import webbrowser
from collections.abc import Callable
from typing import TextIO

from linkshortener.constants import ResolveStatus
from linkshortener.dao.memory import LinkMemoryDAO
from linkshortener.exceptions import LinkShortenerError
from linkshortener.services import ConsoleNotificationSink, ExpirationSweeper, LinkService
from linkshortener.utils import initialize_logging, load_config


logger = logging.getLogger(__name__)

HELP = """Available commands:
  new                   create a new owner id and switch to it
  login ID              switch to an existing owner id
  shorten [URL]         shorten a link
  open [CODE]           resolve a shortcode and open it in the browser
  my                    list your links
  edit CODE [LIMIT]     change the click limit of a link
  extend CODE [DAYS]    extend the lifetime of a link
  delete CODE           delete a link
  stats                 show statistics of your links
  help                  show this help
  exit                  quit"""


class ConsoleApp:
    """Read commands from a text stream and call the link service

    Attributes:
        service (LinkService):
            Link operations.
        owner_id (str | None):
            Currently active owner, None until `new` or `login`.
        open_browser (Callable[[str], object]):
            Opens a resolved URL, `webbrowser.open` by default.
    """

    def __init__(
        self,
        service: LinkService,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        open_browser: Callable[[str], object] = webbrowser.open,
    ):
        self.service = service
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.open_browser = open_browser
        self.owner_id: str | None = None

        self.commands: dict[str, Callable[[list[str]], None]] = {
            'new': self.cmd_new,
            'login': self.cmd_login,
            'shorten': self.cmd_shorten,
            'open': self.cmd_open,
            'my': self.cmd_my,
            'edit': self.cmd_edit,
            'extend': self.cmd_extend,
            'delete': self.cmd_delete,
            'stats': self.cmd_stats,
            'help': self.cmd_help,
        }

    def write(self, message: str = '') -> None:
        print(message, file=self.stdout, flush=True)

    def prompt(self, message: str) -> str | None:
        """Ask for a value; None at end of input"""
        self.stdout.write(message)
        self.stdout.flush()
        line = self.stdin.readline()
        return line.strip() if line else None

    def run(self) -> None:
        self.write("Console link shortener. Type 'help' to get started.")
        while True:
            line = self.prompt('> ')
            if line is None or not self.handle(line):
                break

    def handle(self, line: str) -> bool:
        """Dispatch one command line

        Returns:
            bool: False when the loop should stop.
        """
        parts = line.split()
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command == 'exit':
            return False

        handler = self.commands.get(command)
        if handler is None:
            self.write("Unknown command. Type 'help' for the list of commands.")
            return True

        try:
            handler(args)
        except LinkShortenerError as e:
            self.write(f'Error: {e}')
        return True

    # ---------------------------------
    # Argument helpers
    # ---------------------------------

    def _require_owner(self) -> bool:
        if self.owner_id is None:
            self.write("Create an owner id first: 'new' (or 'login ID').")
            return False
        return True

    def _arg(self, args: list[str], index: int, question: str) -> str | None:
        if len(args) > index:
            return args[index]
        value = self.prompt(question)
        return value or None

    def _int_arg(self, args: list[str], index: int, question: str) -> int | None:
        value = self._arg(args, index, question)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            self.write(f'Not a number: {value}')
            return None

    # ---------------------------------
    # Commands
    # ---------------------------------

    def cmd_help(self, args: list[str]) -> None:
        self.write(HELP)

    def cmd_new(self, args: list[str]) -> None:
        self.owner_id = str(uuid.uuid4())
        self.write(f'Owner created: {self.owner_id}')
        self.write('Keep this id to manage your links later.')

    def cmd_login(self, args: list[str]) -> None:
        owner_id = self._arg(args, 0, 'Owner id: ')
        if owner_id is None:
            return
        self.owner_id = owner_id
        self.write(f'Switched to owner {owner_id}')

    def cmd_shorten(self, args: list[str]) -> None:
        if not self._require_owner():
            return

        url = self._arg(args, 0, 'URL: ')
        if url is None:
            return

        default = self.service.settings.default_max_clicks
        answer = self.prompt(f'Max clicks [{default}]: ')
        if answer:
            try:
                max_clicks = int(answer)
            except ValueError:
                self.write(f'Not a number: {answer}')
                return
        else:
            max_clicks = default

        short_url = self.service.shorten(self.owner_id, url, max_clicks)
        self.write(f'Created: {short_url}')

    def cmd_open(self, args: list[str]) -> None:
        shortcode = self._arg(args, 0, 'Shortcode: ')
        if shortcode is None:
            return

        resolution = self.service.resolve(shortcode)
        if not resolution.ok:
            messages = {
                ResolveStatus.NOT_FOUND: 'Link not found.',
                ResolveStatus.UNAVAILABLE: 'Link unavailable (expired or click limit reached).',
            }
            self.write(messages[resolution.status])
            return

        self.write(f'Opening: {resolution.target}')
        try:
            self.open_browser(resolution.target)
        except webbrowser.Error as e:
            self.write(f'Browser error: {e}')

    def cmd_my(self, args: list[str]) -> None:
        if not self._require_owner():
            return

        links = self.service.list_for_owner(self.owner_id)
        if not links:
            self.write('You have no links.')
            return

        for link in links:
            # fmt: off
            self.write(
                f'{self.service.short_url(link.shortcode)} -> {link.target} '
                f'(clicks: {link.click_count}/{link.max_clicks}, '
                f'expires: {link.expires_at:%Y-%m-%d %H:%M} UTC, '
                f'active: {"yes" if link.is_active() else "no"})'
            )
            # fmt: on

    def cmd_edit(self, args: list[str]) -> None:
        if not self._require_owner():
            return

        shortcode = self._arg(args, 0, 'Shortcode: ')
        new_limit = self._int_arg(args, 1, 'New click limit: ') if shortcode else None
        if new_limit is None:
            return

        if self.service.update_max_clicks(self.owner_id, shortcode, new_limit):
            self.write(f'Click limit updated for {shortcode}')
        else:
            self.write('Could not update the link. Check the code and your access rights.')

    def cmd_extend(self, args: list[str]) -> None:
        if not self._require_owner():
            return

        shortcode = self._arg(args, 0, 'Shortcode: ')
        days = self._int_arg(args, 1, 'Additional days: ') if shortcode else None
        if days is None:
            return

        if self.service.extend_lifetime(self.owner_id, shortcode, days):
            self.write(f'Lifetime of {shortcode} extended by {days} days')
        else:
            self.write('Could not extend the link. Check the code and your access rights.')

    def cmd_delete(self, args: list[str]) -> None:
        if not self._require_owner():
            return

        shortcode = self._arg(args, 0, 'Shortcode to delete: ')
        if shortcode is None:
            return

        if self.service.delete(self.owner_id, shortcode):
            self.write(f'Deleted: {shortcode}')
        else:
            self.write('Could not delete the link. Check the code and your access rights.')

    def cmd_stats(self, args: list[str]) -> None:
        if not self._require_owner():
            return

        stats = self.service.stats(self.owner_id)
        self.write(f'Statistics for {self.owner_id}:')
        self.write(f'  Links:          {stats.total}')
        self.write(f'  Active:         {stats.active}')
        self.write(f'  Inactive:       {stats.inactive}')
        self.write(f'  Total clicks:   {stats.total_clicks}')
        self.write(f'  Clicks / link:  {stats.mean_clicks:.2f}')


def build_service(config_path: str | None = None) -> LinkService:
    settings = load_config(config_path)
    return LinkService(dao=LinkMemoryDAO(), settings=settings, notifier=ConsoleNotificationSink())


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Steps:
        - Parse CLI arguments
        - Initialize logging and load settings
        - Run the console loop with the expiration sweeper in the background
    """
    parser = argparse.ArgumentParser(
        prog='linkshortener',
        description='Shorten URLs with per-link expiry and click limits',
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to the YAML configuration file (default: $CONFIG_PATH or config/$APP_ENV.yml)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Log level, e.g. DEBUG or INFO (default: $LOG_LEVEL or WARNING)',
    )
    args = parser.parse_args(argv)

    initialize_logging(args.log_level)
    service = build_service(args.config)

    with ExpirationSweeper(service.dao, interval_seconds=service.settings.sweep_interval_seconds):
        ConsoleApp(service).run()
