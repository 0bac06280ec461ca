"""``notify-console`` command line entry point."""

import click

from notify_console import __version__
from notify_console.cli.commands import server, templates
from notify_console.infra.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="notify-console")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Template tooling for the notify relay.

    \b
    Examples:
      notify-console templates preview '{{ .level | upper }}: {{ .title }}'
      notify-console templates export -o templates.json
      notify-console templates import templates.json --generate-new-ids --dry-run
      notify-console serve --port 9000
    """
    ctx.ensure_object(dict)
    setup_logging()


cli.add_command(templates.templates)
cli.add_command(server.serve)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
