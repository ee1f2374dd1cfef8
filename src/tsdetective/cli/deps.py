"""tsdet deps command - print the dependencies of source files."""

import json
from pathlib import Path

import click
from rich.console import Console

from tsdetective.config.models import TsDetectiveConfig
from tsdetective.core.errors import TsDetectiveError
from tsdetective.core.logging import get_logger
from tsdetective.models import DependencyRecord
from tsdetective.ops import extract_file

log = get_logger(__name__)


@click.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--skip-type-imports/--no-skip-type-imports",
    default=None,
    help="Drop type-only imports and import types.",
)
@click.option(
    "--skip-async-imports/--no-skip-async-imports",
    default=None,
    help="Drop dynamic import() expressions.",
)
@click.option(
    "--mixed-imports/--no-mixed-imports",
    default=None,
    help="Also report CommonJS require() calls.",
)
@click.option("--jsx/--no-jsx", default=None, help="Parse JSX/TSX syntax.")
@click.option(
    "--parser",
    type=click.Choice(["typescript", "javascript"]),
    default=None,
    help="Grammar used to parse the files.",
)
@click.option("--json", "as_json", is_flag=True, help="Print records as JSON.")
@click.pass_context
def deps_command(
    ctx: click.Context,
    files: tuple[Path, ...],
    skip_type_imports: bool | None,
    skip_async_imports: bool | None,
    mixed_imports: bool | None,
    jsx: bool | None,
    parser: str | None,
    as_json: bool,
) -> None:
    """List module specifiers referenced by FILES.

    Options not given on the command line fall back to the
    ``extract`` section of the configuration.
    """
    config: TsDetectiveConfig = ctx.obj["config"]
    options = config.extract.to_options(
        skip_type_imports=skip_type_imports,
        skip_async_imports=skip_async_imports,
        mixed_imports=mixed_imports,
        jsx=jsx,
        parser=parser,
    )

    console = Console(stderr=True)
    results: dict[str, list[DependencyRecord]] = {}
    failed = False

    for path in files:
        try:
            results[str(path)] = extract_file(path, options)
        except TsDetectiveError as e:
            log.debug("extraction failed", path=str(path), error=e.error_name)
            console.print(f"[red]✗[/red] {path}: {e.message}", soft_wrap=True, highlight=False)
            failed = True
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[red]✗[/red] {path}: {e}", soft_wrap=True, highlight=False)
            failed = True

    if as_json:
        payload = {name: [r.to_dict() for r in records] for name, records in results.items()}
        click.echo(json.dumps(payload, indent=2))
    else:
        prefix = len(files) > 1
        for name, records in results.items():
            for record in records:
                click.echo(f"{name}: {record.specifier}" if prefix else record.specifier)

    if failed:
        ctx.exit(1)
