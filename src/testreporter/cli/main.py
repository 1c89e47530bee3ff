"""CLI entry point for testreporter."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from testreporter import __version__
from testreporter.config import ReporterSettings, load_settings
from testreporter.publish import LatestResultMode
from testreporter.reporting import ReportFormat
from testreporter.replay import run_replay


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

FORMAT_CHOICES = ("text", "html", "json")
LATEST_CHOICES = tuple(mode.value for mode in LatestResultMode)


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"testreporter {__version__}")
    raise click.exceptions.Exit()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the testreporter version and exit.",
)
def cli() -> None:
    """Top level CLI group for testreporter."""


@cli.command()
@click.argument("stream_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML settings file (output_dir, formats, latest, color).",
)
@click.option("--output-dir", type=click.Path(file_okay=False), help="Directory receiving the reports.")
@click.option(
    "--format",
    "formats",
    type=click.Choice(FORMAT_CHOICES),
    multiple=True,
    help="Report format to write; repeat for several (all formats by default).",
)
@click.option("--latest", type=click.Choice(LATEST_CHOICES), help="How test-results-latest.* is updated.")
@click.option("--summary/--no-summary", default=True, show_default=True, help="Print a terminal summary.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
def replay(
    stream_path: str,
    config_path: Optional[str],
    output_dir: Optional[str],
    formats: Tuple[str, ...],
    latest: Optional[str],
    summary: bool,
    no_color: bool,
) -> None:
    """Replay a recorded lifecycle stream and write the test reports."""

    try:
        settings = load_settings(config_path) if config_path else ReporterSettings()
        settings = settings.override(
            output_dir=Path(output_dir) if output_dir else None,
            formats=[ReportFormat.parse(name) for name in formats],
            latest_mode=LatestResultMode.parse(latest) if latest else None,
            color=False if no_color else None,
        )
        exit_code = run_replay(stream_path, settings, summary=summary)
    except Exception as exc:  # pragma: no cover - CLI error translation
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(exit_code)


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="testreporter", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
