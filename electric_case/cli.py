"""
Replays a file through an electric-case session as if it were typed.
Prints the converted text to stdout.
"""

from __future__ import annotations

from pathlib import Path

import click
from .classifier import ConstantClassifier
from .config import ConfigError, ConfigScope, build_config
from .host import TextBuffer
from .models import STYLE_NAMES, CaseStyle
from .session import Session

__all__ = ["cli"]


def replay(
    content: str,
    style: CaseStyle,
    scope: ConfigScope,
    triggers: tuple[str, ...] = (),
    warn=None,
) -> str:
    """Type `content` into a fresh buffer with conversion enabled.

    Characters listed in `triggers` are pressed through a trigger binding, so
    a synthetic-delimiter pass runs before they are inserted.

    Returns:
        str: The buffer text once every character has been typed.

    Examples:
        replay("foo-bar = 1;\\n", CaseStyle.SNAKE, ConfigScope())  # "foo_bar = 1;\\n"
    """
    buffer = TextBuffer()
    session = Session(buffer, classifier=ConstantClassifier(style), scope=scope, warn=warn)
    for key in triggers:
        session.bind_trigger(key)
    session.enable()

    for char in content:
        if char in triggers:
            buffer.press(char)
        else:
            buffer.type(char)

    session.close()
    return buffer.text


@click.command()
@click.version_option(package_name="electric-case")
@click.option(
    "--style",
    type=click.Choice(STYLE_NAMES),
    default="snake",
    show_default=True,
    help="Case style applied to every hyphenated token",
)
@click.option("--max-iteration", type=int, help="Number of trailing tokens re-examined per edit")
@click.option(
    "--convert-numerals/--no-convert-numerals", default=None, help="Treat digits as token characters"
)
@click.option(
    "--convert-leading-hyphens/--no-convert-leading-hyphens",
    default=None,
    help="Rewrite hyphens at the start of a token",
)
@click.option(
    "--convert-trailing-hyphens/--no-convert-trailing-hyphens",
    default=None,
    help="Rewrite hyphens at the end of a token",
)
@click.option(
    "--trigger",
    "triggers",
    multiple=True,
    help="Character that runs a synthetic-delimiter pass before it is typed",
)
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    style: str = "snake",
    max_iteration: int | None = None,
    convert_numerals: bool | None = None,
    convert_leading_hyphens: bool | None = None,
    convert_trailing_hyphens: bool | None = None,
    triggers: tuple[str, ...] = (),
):
    """
    Type FILEPATH into an electric-case buffer and print the result.

    Args:
        filepath: Path to the file to replay.
        style: Case style name (`camel`, `ucamel`, `snake`, `usnake`, `none`).
        max_iteration: Override for the iteration depth.
        convert_numerals: Override for the numerals switch.
        convert_leading_hyphens: Override for the leading-hyphen switch.
        convert_trailing_hyphens: Override for the trailing-hyphen switch.
        triggers: Characters bound to the synthetic-delimiter pass.

    Raises:
        click.BadParameter: If configuration or trigger values are invalid.
        click.ClickException: If the file cannot be read.

    Examples:
        electric-case notes.txt --style camel --trigger "("
    """
    path = Path(filepath)
    try:
        config = build_config(
            path.resolve().parent,
            max_iteration=max_iteration,
            convert_numerals=convert_numerals,
            convert_leading_hyphens=convert_leading_hyphens,
            convert_trailing_hyphens=convert_trailing_hyphens,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    for key in triggers:
        if len(key) != 1:
            raise click.BadParameter(f"Trigger must be a single character, got {key!r}")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise click.ClickException(f"Could not read {filepath}: {error}") from error

    result = replay(
        content,
        CaseStyle.from_name(style),
        ConfigScope(config),
        triggers=triggers,
        warn=lambda message: click.echo(message, err=True),
    )
    click.echo(result, nl=False)


if __name__ == "__main__":
    cli()
