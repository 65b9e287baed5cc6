from __future__ import annotations

from pathlib import Path

import typer

from ghbackup import __version__
from ghbackup.cli.context import build_context
from ghbackup.core.config import FileConfig, build_config, load_config
from ghbackup.core.errors import ErrorCode
from ghbackup.core.result import Err
from ghbackup.output.errors import backup_error_exit_code, print_backup_error, print_config_error
from ghbackup.output.events import ConsoleEventPrinter
from ghbackup.services.backup import BackupService
from ghbackup.sync.events import EventSink


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.command()
def backup(
    account: str = typer.Argument(
        ..., help="GitHub user or organization name to get the repositories from."
    ),
    backup_dir: Path = typer.Argument(..., help="Directory path to save the repositories to."),
    token: str | None = typer.Option(
        None,
        "--token",
        "-t",
        envvar="GITHUB_TOKEN",
        help="Access token; raises the rate limit and exposes private repositories.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print progress information."),
    workers: int | None = typer.Option(
        None, "--workers", "-w", help="Maximum concurrent clone/pull operations [default: 10]."
    ),
    api_url: str | None = typer.Option(
        None,
        "--api-url",
        envvar="GHBACKUP_API_URL",
        help="API root, for GitHub Enterprise [default: https://api.github.com].",
    ),
    protocol: str | None = typer.Option(
        None, "--protocol", help="Clone URL to use: git, https or ssh [default: git]."
    ),
    config_path: Path | None = typer.Option(None, "--config", help="TOML config file."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Clone or update every repository of a GitHub user or organization."""
    ctx = build_context()

    file_config: FileConfig | None = None
    if config_path is not None:
        file_result = load_config(config_path.expanduser())
        if isinstance(file_result, Err):
            print_config_error(file_result.error, ctx.console)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        file_config = file_result.value

    config_result = build_config(
        account=account,
        root=backup_dir.expanduser(),
        file=file_config,
        token=token,
        workers=workers,
        api_url=api_url,
        protocol=protocol,
        verbose=verbose,
    )
    if isinstance(config_result, Err):
        print_config_error(config_result.error, ctx.console)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value

    printer = ConsoleEventPrinter(ctx.console, verbose=config.verbose)
    with EventSink(printer) as sink:
        result = BackupService(config=config, sink=sink).run()

    if isinstance(result, Err):
        print_backup_error(result.error, ctx.console)
        raise typer.Exit(code=backup_error_exit_code(result.error))

    report = result.value.report
    if config.verbose:
        ctx.console.success(
            f"{len(report.cloned)} cloned, {len(report.updated)} updated, "
            f"{len(report.failed)} failed"
        )
    if sink.has_errors:
        ctx.console.error(f"{len(report.failed)} of {result.value.total} repositories failed")
        raise typer.Exit(code=int(ErrorCode.SYNC_ERROR))


def main() -> None:
    app()
