"""CLI adapter for ``lib_coded_errors`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let developers inspect naming derivations, browse the ready-made catalog, and
preview how an error renders and serialises without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_derive` – exposes :func:`lib_coded_errors.derive_code_and_name`.
* :func:`cli_catalog` – lists the catalog variants as JSON.
* :func:`cli_render` – builds an error and prints its ``to_json`` output.
* :func:`cli_fail` – raises the deterministic testing failure.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It only calls the public library API;
``lib_cli_exit_tools`` centralises the exit code strategy so all commands
behave consistently across shells and CI.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .application.naming import derive_code_and_name
from .catalog import CATALOG
from .core import Omitting, define_variant
from .domain.constants import DEFAULT_OMITTING
from .domain.errors import ConfigurationError
from .testing import i_should_fail

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_coded_errors")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Coded, chainable application errors",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_coded_errors",
    message="lib_coded_errors version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_coded_errors")
    except metadata.PackageNotFoundError:
        click.echo("lib_coded_errors (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_coded_errors')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")
    for entry in meta.get_all("Project-URL") or []:
        click.echo(f"  {entry}")


@cli.command("derive", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--code", default=None, help="Error code, e.g. E_SOMETHING_WICKED")
@click.option("--name", default=None, help="Error name, e.g. SomethingWickedError")
def cli_derive(code: Optional[str], name: Optional[str]) -> None:
    """Complete a code/name pair and print it as JSON.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["derive", "--name", "FooError"])
    >>> result.output.strip()
    '{"code":"E_FOO","name":"FooError"}'
    """

    try:
        resolved = derive_code_and_name(code=code, name=name)
    except ConfigurationError as exc:
        raise click.UsageError("Provide --code, --name, or both.") from exc
    click.echo(json.dumps({"code": resolved.code, "name": resolved.name}, separators=(",", ":")))


@cli.command("catalog", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_catalog(indent: Optional[int]) -> None:
    """List the ready-made variants with their codes and parents."""

    entries = [
        {"name": name, "code": variant.code, "parent": variant.__bases__[0].__name__}
        for name, variant in CATALOG.items()
    ]
    click.echo(json.dumps(entries, indent=indent, separators=(",", ":")))


@cli.command("render", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--code", default=None, help="Error code of the rendered variant")
@click.option("--name", default=None, help="Error name of the rendered variant")
@click.option("--message", "message", default=None, help="Message of the rendered error")
@click.option(
    "--cause",
    "causes",
    multiple=True,
    help="Cause text (repeatable; more than one renders a cause list)",
)
@click.option("--info", "info", default=None, help="Contextual info as a JSON document")
@click.option(
    "--omit",
    "omit",
    multiple=True,
    help=f"Property to omit (repeatable, defaults to {DEFAULT_OMITTING})",
)
@click.option("--no-omit", is_flag=True, default=False, help="Omit nothing, stacks included")
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_render(
    code: Optional[str],
    name: Optional[str],
    message: Optional[str],
    causes: Sequence[str],
    info: Optional[str],
    omit: Sequence[str],
    no_omit: bool,
    indent: Optional[int],
) -> None:
    """Build an error from the options and print its safe JSON form."""

    try:
        variant = define_variant(code=code, name=name)
    except ConfigurationError as exc:
        raise click.UsageError("Provide --code, --name, or both.") from exc
    error = variant(message, cause=_normalize_causes(causes), info=_parse_info(info))
    click.echo(error.to_json(omitting=_normalize_omit(omit, no_omit), indent=indent))


@cli.command("fail", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_fail() -> None:
    """Trigger a deterministic error for testing traceback handling.

    This mirrors the helper exposed by `lib_coded_errors.testing.i_should_fail`.
    """

    i_should_fail()


def _normalize_causes(causes: Sequence[str]) -> Any:
    """Return ``None``, the single cause, or the list of causes."""

    if not causes:
        return None
    if len(causes) == 1:
        return causes[0]
    return list(causes)


def _parse_info(info: Optional[str]) -> Any:
    """Decode the ``--info`` JSON document."""

    if info is None:
        return None
    try:
        return json.loads(info)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON: {exc.msg}", param_hint="--info") from exc


def _normalize_omit(omit: Sequence[str], no_omit: bool) -> Omitting:
    """Translate ``--omit`` / ``--no-omit`` into an ``omitting`` argument."""

    if no_omit and omit:
        raise click.UsageError("--omit and --no-omit are mutually exclusive.")
    if no_omit:
        return False
    if not omit:
        return DEFAULT_OMITTING
    return list(omit)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_coded_errors",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
