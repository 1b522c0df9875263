"""``tdbind generate``: compile a schema document into a bindings package.

Behavior
- Reads the JSON schema document at SCHEMA, generates ``types.py`` and
  ``operations.py`` (plus ``__init__.py``) and writes them into OUT_DIR,
  creating it when missing.
- Status lines go to **stderr**; nothing is printed on stdout.

Failure modes
- Unreadable or malformed schema, duplicate names or unresolved type
  references: ``ClickException`` and nothing is written.
- Output directory that cannot be created or written: an error line and
  exit status 1.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from tdbind.codegen import generate as generate_bindings
from tdbind.codegen import load_definitions, write_bindings
from tdbind.config import GeneratorConfig, TextRepresentation
from tdbind.domain.errors import SchemaError
from tdbind.domain.schema import is_visible

from .helpers import error, success, warn

logger = logging.getLogger(__name__)

SKIPPED_RESTRICTED_MSG = (
    "Skipped {count} restricted definition(s); "
    "pass --include-restricted-api to emit them."
)


@click.command()
@click.argument(
    "schema", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.argument("out_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option(
    "--include-restricted-api/--no-include-restricted-api",
    "include_restricted_api",
    default=False,
    show_default=True,
    envvar="TDBIND_INCLUDE_RESTRICTED_API",
    show_envvar=True,
    help="Emit definitions and fields gated behind the restricted capability.",
)
@click.option(
    "--text-representation",
    type=click.Choice([t.value for t in TextRepresentation], case_sensitive=False),
    default=TextRepresentation.STANDARD.value,
    show_default=True,
    envvar="TDBIND_TEXT_REPRESENTATION",
    show_envvar=True,
    help="Representation of text fields; 'shared' interns every decoded string.",
)
def generate(
    schema: Path, out_dir: Path, include_restricted_api: bool, text_representation: str
) -> None:
    """Generate Python bindings from SCHEMA into OUT_DIR."""
    config = GeneratorConfig(
        include_restricted_api=include_restricted_api,
        text_representation=TextRepresentation(text_representation.lower()),
    )
    try:
        definitions = load_definitions(schema)
        bindings = generate_bindings(definitions, config)
    except SchemaError as e:
        logger.debug("Generation aborted", exc_info=True)
        raise click.ClickException(str(e)) from e

    try:
        written = write_bindings(bindings, out_dir)
    except OSError as e:
        logger.debug("Writing bindings failed", exc_info=True)
        error(f"Cannot write bindings to {out_dir}")
        click.echo(str(e), err=True)
        raise click.exceptions.Exit(1) from e

    if skipped := sum(
        1 for d in definitions if not is_visible(d, include_restricted_api)
    ):
        warn(SKIPPED_RESTRICTED_MSG.format(count=skipped))
    success(f"Wrote {len(written)} files to {out_dir}")
