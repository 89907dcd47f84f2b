"""Semantica CLI application with Typer."""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import click
import typer
from typer.core import TyperCommand

from semantica import __version__
from semantica.app.ports import EncodeError
from semantica.bootstrap import bootstrap_application
from semantica.config import get_settings
from semantica.index.layout import FormatError
from semantica.index.semantic_index import IndexOutOfRange
from semantica.index.vector import SizeMismatch

app = typer.Typer(
    name="semantica",
    help="Store values under text labels and look them up by meaning.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"semantica version {__version__}")
        raise typer.Exit()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_value(raw: str, codec_name: str) -> Any:
    """Convert a command-line VALUE according to the configured codec."""
    if codec_name == "int":
        return int(raw)
    if codec_name == "json":
        return json.loads(raw)
    return raw


def _format_value(value: Any, codec_name: str) -> str:
    if value is None:
        return "null"
    if codec_name == "json":
        return json.dumps(value, sort_keys=True)
    return str(value)


_VALUE_FLAGS = ("-s", "--search", "-f", "--filepath")
_REMOVE_FLAGS = ("-x", "--remove")
_ADD_FLAGS = ("-a", "--add")


def _is_option(token: str) -> bool:
    """True for tokens click would read as a flag; negative numbers are values."""
    if not token.startswith("-") or token == "-":
        return False
    try:
        float(token)
    except ValueError:
        return True
    return False


def _match_flag(token: str, flags: tuple[str, ...]) -> tuple[str | None, str | None]:
    """Return ``(flag, attached value)`` for ``-x``, ``-x3`` or ``--remove=3`` tokens."""
    for flag in flags:
        if token == flag:
            return flag, None
        if flag.startswith("--"):
            if token.startswith(flag + "="):
                return flag, token[len(flag) + 1 :]
        elif token.startswith(flag) and not token.startswith("--"):
            return flag, token[len(flag) :]
    return None, None


def _expand_variadic_options(ctx: click.Context, args: list[str]) -> list[str]:
    """Rewrite ``-x ID...`` and ``-a NAME VALUE...`` into one option per item.

    ``-x 0 2`` becomes ``-x 0 -x 2``. Each add pair becomes ``-a NAME -a VALUE``;
    a single token holding ``=`` is a ``NAME=VALUE`` pair split at the last ``=``.
    """
    expanded: list[str] = []
    i = 0
    while i < len(args):
        token = args[i]
        i += 1
        if token == "--":
            expanded.extend(args[i - 1 :])
            break
        if token in _VALUE_FLAGS:
            expanded.append(token)
            if i < len(args):
                expanded.append(args[i])
                i += 1
            continue

        flag, attached = _match_flag(token, _REMOVE_FLAGS)
        if flag is not None:
            ids = [attached] if attached is not None else []
            if not ids and i < len(args):
                ids.append(args[i])
                i += 1
            while i < len(args) and not _is_option(args[i]):
                ids.append(args[i])
                i += 1
            if not ids:
                expanded.append(flag)
            for ident in ids:
                expanded.extend([flag, ident])
            continue

        flag, attached = _match_flag(token, _ADD_FLAGS)
        if flag is None:
            expanded.append(token)
            continue
        if attached is None:
            if i >= len(args):
                expanded.append(flag)
                continue
            attached = args[i]
            i += 1
        name_token = attached
        while True:
            name, sep, value = name_token.rpartition("=")
            if not sep:
                if i >= len(args) or _is_option(args[i]):
                    raise click.UsageError(
                        f"Option '{flag}' expects NAME VALUE; {name_token!r} has no VALUE",
                        ctx=ctx,
                    )
                name, value = name_token, args[i]
                i += 1
            expanded.extend([flag, name, flag, value])
            if i >= len(args) or _is_option(args[i]):
                break
            name_token = args[i]
            i += 1
    return expanded


class SemanticaCommand(TyperCommand):
    """Command accepting several IDs or NAME VALUE pairs after one flag."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        return super().parse_args(ctx, _expand_variadic_options(ctx, args))


def _parse_pairs(ctx: typer.Context, tokens: list[str], codec_name: str) -> list[tuple[str, Any]]:
    parsed: list[tuple[str, Any]] = []
    for name, raw in zip(tokens[0::2], tokens[1::2]):
        if not name:
            raise typer.BadParameter(
                f"Expected NAME VALUE; got an empty NAME for {raw!r}",
                ctx=ctx,
                param_hint="'-a' / '--add'",
            )
        try:
            value = _parse_value(raw, codec_name)
        except ValueError as exc:
            raise typer.BadParameter(
                f"{raw!r} is not a valid {codec_name} value", ctx=ctx, param_hint="'-a' / '--add'"
            ) from exc
        parsed.append((name, value))
    return parsed


@app.command(cls=SemanticaCommand)
def main(
    ctx: typer.Context,
    filepath: Annotated[
        Path | None,
        typer.Option("--filepath", "-f", help="Override the persisted index path"),
    ] = None,
    search: Annotated[
        str | None,
        typer.Option("--search", "-s", metavar="NAME", help="Print the value best matching NAME, or null"),
    ] = None,
    remove: Annotated[
        list[int] | None,
        typer.Option("--remove", "-x", metavar="ID...", help="Remove the entries at positions ID..."),
    ] = None,
    add: Annotated[
        list[str] | None,
        typer.Option(
            "--add",
            "-a",
            metavar="NAME VALUE...",
            help="Store each VALUE under label NAME (NAME=VALUE also accepted)",
        ),
    ] = None,
    list_entries: Annotated[
        bool,
        typer.Option("--list", "-l", help="List stored entries with their positions"),
    ] = False,
    online: Annotated[
        bool,
        typer.Option("--online", help="Allow downloading the embedding model"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """Look up, remove, or add label/value entries in a semantic index.

    Without --search, removals are applied before additions and the index file
    is always rewritten.
    """
    # Flags apply to this invocation only; the shared settings stay untouched
    overrides: dict[str, Any] = {}
    if online:
        overrides["online"] = True
    if filepath is not None:
        overrides["index_path"] = filepath
    settings = get_settings().model_copy(update=overrides)
    _configure_logging("DEBUG" if verbose else settings.log_level)

    remove = remove or []
    add = add or []
    if search is not None and (remove or add):
        raise click.UsageError("--search cannot be combined with --remove or --add", ctx=ctx)

    pairs = _parse_pairs(ctx, add, settings.value_codec)
    path = settings.get_index_path()

    try:
        container = bootstrap_application(settings)
        service = container.index_service

        if search is not None:
            hit = service.search(path, search)
            typer.echo(_format_value(None if hit is None else hit.value, settings.value_codec))
            return

        if list_entries and not (remove or add):
            entries = service.list_entries(path)
            if not entries:
                typer.secho("Index is empty", fg=typer.colors.YELLOW)
            for position, value in entries:
                typer.echo(f"{position}\t{_format_value(value, settings.value_codec)}")
            return

        change = service.apply(path, remove=remove, add=pairs)
    except IndexOutOfRange as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    except FormatError as exc:
        typer.secho(f"Error: index file {path} is corrupt: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    except (EncodeError, SizeMismatch, ValueError) as exc:
        typer.secho(f"Error: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    if change.removed:
        typer.secho(f"Removed {len(change.removed)} entries", fg=typer.colors.BLUE)
    if change.added:
        typer.secho(f"Added {len(change.added)} entries", fg=typer.colors.BLUE)
    typer.secho(f"Index holds {change.size} entries at {change.path}", fg=typer.colors.GREEN)

    if list_entries:
        for position, value in service.list_entries(path):
            typer.echo(f"{position}\t{_format_value(value, settings.value_codec)}")


if __name__ == "__main__":
    app()
