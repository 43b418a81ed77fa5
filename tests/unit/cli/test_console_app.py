"""Unit tests for the interactive console front end.

Test coverage includes:

1. Command dispatch
   - help / unknown commands / exit / end of input.

2. Owner handling
   - new / login switch the active owner; owner-only commands require one.

3. Link commands
   - shorten / open / my / edit / extend / delete / stats call the service
     and print the outcome; invalid input is reported without leaving the loop.

4. Entry point
   - main() loads the configuration and runs the loop with the sweeper.
"""

import io
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from linkshortener.cli import app as cli
from linkshortener.cli import ConsoleApp


@pytest.fixture
def browser():
    return MagicMock()


@pytest.fixture
def console(service, browser):
    """Build a ConsoleApp reading the given input lines."""

    def _console(*lines: str) -> ConsoleApp:
        stdin = io.StringIO(''.join(f'{line}\n' for line in lines))
        return ConsoleApp(service, stdin=stdin, stdout=io.StringIO(), open_browser=browser)

    return _console


def output(app: ConsoleApp) -> str:
    return app.stdout.getvalue()


def created_shortcode(app: ConsoleApp) -> str:
    line = next(line for line in output(app).splitlines() if 'Created: ' in line)
    return line.rsplit('/', 1)[-1]


# -------------------------------
# 1. Command dispatch
# -------------------------------


def test_help_lists_commands(console):
    app = console('help', 'exit')
    app.run()

    for command in ('new', 'shorten', 'open', 'my', 'edit', 'extend', 'delete', 'stats', 'exit'):
        assert command in output(app)


def test_unknown_command(console):
    app = console('frobnicate', 'exit')
    app.run()

    assert 'Unknown command' in output(app)


def test_blank_lines_are_ignored(console):
    app = console('', '   ', 'exit')
    app.run()

    assert 'Unknown command' not in output(app)


def test_run_stops_at_end_of_input(console):
    app = console('help')
    app.run()  # no 'exit': returns once stdin is exhausted


def test_handle_returns_false_on_exit(console):
    app = console()
    assert app.handle('EXIT') is False
    assert app.handle('help') is True


# -------------------------------
# 2. Owner handling
# -------------------------------


def test_new_creates_owner(console):
    app = console('new', 'exit')
    app.run()

    assert app.owner_id is not None
    assert f'Owner created: {app.owner_id}' in output(app)


def test_login_switches_owner(console):
    app = console('login owner-42', 'exit')
    app.run()

    assert app.owner_id == 'owner-42'


@pytest.mark.parametrize('command', ['shorten https://example.com', 'my', 'edit abc 1', 'extend abc 1', 'delete abc', 'stats'])
def test_owner_commands_require_owner(console, command):
    app = console(command, 'exit')
    app.run()

    assert 'Create an owner id first' in output(app)


# -------------------------------
# 3. Link commands
# -------------------------------


def test_shorten_with_explicit_limit(console, dao):
    app = console('login owner-1', 'shorten https://example.com', '2', 'exit')
    app.run()

    link = dao.get(created_shortcode(app))
    assert link.target == 'https://example.com'
    assert link.max_clicks == 2
    assert link.owner_id == 'owner-1'


def test_shorten_prompts_for_url_and_uses_default_limit(console, dao, settings):
    app = console('login owner-1', 'shorten', 'https://example.com', '', 'exit')
    app.run()

    assert dao.get(created_shortcode(app)).max_clicks == settings.default_max_clicks


def test_shorten_invalid_url_reports_error(console, dao):
    app = console('login owner-1', 'shorten example', '', 'help', 'exit')
    app.run()

    assert 'Error: Invalid URL' in output(app)
    assert 'Available commands' in output(app)  # loop continued
    assert dao.count() == 0


def test_shorten_invalid_limit(console, dao):
    app = console('login owner-1', 'shorten https://example.com', 'many', 'exit')
    app.run()

    assert 'Not a number: many' in output(app)
    assert dao.count() == 0


def test_open_resolves_and_opens_browser(console, service, browser):
    code = service.shorten('owner-1', 'https://example.com', 1).rsplit('/', 1)[-1]
    app = console(f'open {code}', f'open {code}', 'open missing', 'exit')
    app.run()

    browser.assert_called_once_with('https://example.com')
    assert 'Opening: https://example.com' in output(app)
    assert 'Link unavailable' in output(app)
    assert 'Link not found' in output(app)


def test_my_lists_links(console, service):
    service.shorten('owner-1', 'https://example.com/a', 3)
    app = console('login owner-1', 'my', 'exit')
    app.run()

    assert 'https://example.com/a' in output(app)
    assert 'clicks: 0/3' in output(app)
    assert 'active: yes' in output(app)


def test_my_without_links(console):
    app = console('login owner-1', 'my', 'exit')
    app.run()

    assert 'You have no links.' in output(app)


def test_edit_extend_delete_by_owner(console, service, dao):
    code = service.shorten('owner-1', 'https://example.com', 1).rsplit('/', 1)[-1]
    expires_at = dao.get(code).expires_at
    app = console('login owner-1', f'edit {code} 9', f'extend {code} 2', 'exit')
    app.run()

    link = dao.get(code)
    assert link.max_clicks == 9
    assert (link.expires_at - expires_at).days == 2
    assert f'Click limit updated for {code}' in output(app)
    assert f'Lifetime of {code} extended by 2 days' in output(app)

    app = console('login owner-1', f'delete {code}', 'exit')
    app.run()
    assert dao.get(code) is None
    assert f'Deleted: {code}' in output(app)


def test_edit_extend_delete_by_other_owner(console, service, dao):
    code = service.shorten('owner-1', 'https://example.com', 1).rsplit('/', 1)[-1]
    app = console('login owner-2', f'edit {code} 9', f'extend {code} 2', f'delete {code}', 'exit')
    app.run()

    assert dao.get(code).max_clicks == 1
    assert 'Could not update the link' in output(app)
    assert 'Could not extend the link' in output(app)
    assert 'Could not delete the link' in output(app)


def test_edit_rejects_non_positive_limit(console, service, dao):
    code = service.shorten('owner-1', 'https://example.com', 1).rsplit('/', 1)[-1]
    app = console('login owner-1', f'edit {code} 0', f'edit {code} x', 'exit')
    app.run()

    assert 'Error: new_limit must be a positive integer' in output(app)
    assert 'Not a number: x' in output(app)
    assert dao.get(code).max_clicks == 1


def test_extend_past_largest_date_keeps_console_running(console, service, dao):
    code = service.shorten('owner-1', 'https://example.com', 1).rsplit('/', 1)[-1]
    expires_at = dao.get(code).expires_at
    app = console('login owner-1', f'extend {code} 99999999999', 'help', 'exit')
    app.run()

    assert 'Error: additional_days is too large' in output(app)
    assert 'Available commands' in output(app)
    assert dao.get(code).expires_at == expires_at


def test_stats(console, service):
    code = service.shorten('owner-1', 'https://example.com', 2).rsplit('/', 1)[-1]
    service.resolve(code)
    app = console('login owner-1', 'stats', 'exit')
    app.run()

    text = output(app)
    assert 'Links:          1' in text
    assert 'Active:         1' in text
    assert 'Total clicks:   1' in text
    assert 'Clicks / link:  1.00' in text


# -------------------------------
# 4. Entry point
# -------------------------------


def test_main_runs_console_with_sweeper(monkeypatch: MonkeyPatch, tmp_path):
    config = tmp_path / 'local.yml'
    config.write_text('base_url: http://testserver\nsweep_interval_seconds: 3600\n', encoding='utf-8')

    initialize_logging = MagicMock()
    monkeypatch.setattr(cli, 'initialize_logging', initialize_logging)
    monkeypatch.setattr('sys.stdin', io.StringIO('help\nexit\n'))
    stdout = io.StringIO()
    monkeypatch.setattr('sys.stdout', stdout)

    cli.main(['--config', str(config), '--log-level', 'DEBUG'])

    initialize_logging.assert_called_once_with('DEBUG')
    assert 'Available commands' in stdout.getvalue()


def test_build_service_uses_configuration(tmp_path):
    config = tmp_path / 'local.yml'
    config.write_text('base_url: http://sho.rt\ndefault_max_clicks: 4\n', encoding='utf-8')

    service = cli.build_service(str(config))

    assert service.settings.base_url == 'http://sho.rt/'
    assert service.dao.count() == 0
