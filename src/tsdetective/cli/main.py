"""tsdetective CLI - tsdet command."""

import click

from tsdetective import __version__
from tsdetective.cli.deps import deps_command
from tsdetective.config import load_config
from tsdetective.core.errors import ConfigError
from tsdetective.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="tsdet")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """tsdetective - list the modules a JavaScript/TypeScript file depends on."""
    ctx.ensure_object(dict)
    try:
        config = load_config()
    except ConfigError as e:
        raise click.ClickException(str(e)) from e
    ctx.obj["config"] = config
    if verbose:
        configure_logging(level="DEBUG")
    else:
        configure_logging(config=config.logging)


cli.add_command(deps_command, name="deps")


if __name__ == "__main__":
    cli()
