"""state-probe command line (Typer + Rich)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import typer
from rich.console import Console
from rich.markup import escape

from adapters.blobs import MappingBlobConverter
from adapters.host_environment import StaticHostEnvironment
from adapters.json_exporter import default_report_path, export_report_json
from adapters.reflection import ReflectiveEnumerator, load_object
from adapters.samples import FactorySampleProvider
from cli import doctor
from cli.ui_components import build_capabilities_panel, build_observations_table, print_banner
from core.config import AppSettings
from core.domain.models import HostVersion, ProtocolVariant
from core.errors import CapabilityResolutionError
from core.services.capability_resolver import CapabilityResolver

app = typer.Typer(
    no_args_is_help=True,
    help="Discover the load/save state operations of an opaque class by probing it.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(*, verbose: bool, settings: AppSettings) -> None:
    level = logging.DEBUG if verbose else resolve_log_level(settings.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _load_ref(spec: str, *, param_hint: str) -> Any:
    try:
        return load_object(spec)
    except (ValueError, ImportError) as exc:
        raise typer.BadParameter(str(exc), param_hint=param_hint) from exc


def _load_callable(spec: str | None, *, param_hint: str) -> Callable[..., Any] | None:
    if spec is None:
        return None
    obj = _load_ref(spec, param_hint=param_hint)
    if not callable(obj):
        raise typer.BadParameter(f"{spec!r} is not callable", param_hint=param_hint)
    return obj


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every probe (DEBUG)."),
) -> None:
    configure_logging(verbose=verbose, settings=AppSettings())


@app.command()
def probe(
    target: str = typer.Argument(..., help="Opaque base type, as module:Class."),
    factory: str | None = typer.Option(None, "--factory", help="Sample factory, as module:callable."),
    teardown: str | None = typer.Option(
        None, "--teardown", help="Sample teardown, as module:callable (receives the sample)."
    ),
    host_version: str | None = typer.Option(
        None, "--host-version", help="Host version (e.g. 1.12.2); picks the protocol via the threshold."
    ),
    variant: ProtocolVariant | None = typer.Option(
        None, "--variant", case_sensitive=False, help="Force a protocol variant."
    ),
    contexts: list[str] | None = typer.Option(
        None, "--context", help="Active host context (repeatable). Defaults to settings."
    ),
    blob_type: str | None = typer.Option(
        None, "--blob-type", help="State blob class (dict subclass), as module:Class."
    ),
    json_path: Path | None = typer.Option(None, "--json", help="Export the resolution report to JSON."),
    save_report: bool = typer.Option(
        False, "--save-report", help="Export the report under the configured reports directory."
    ),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the banner."),
) -> None:
    """Resolve the load and save operations of TARGET."""

    settings = AppSettings()

    if host_version is not None and variant is not None:
        raise typer.BadParameter("Use either --host-version or --variant, not both")
    if host_version is None and variant is None:
        raise typer.BadParameter("One of --host-version or --variant is required")

    base_type = _load_ref(target, param_hint="TARGET")
    if not isinstance(base_type, type):
        raise typer.BadParameter(f"{target!r} is not a class", param_hint="TARGET")

    parsed_version: HostVersion | None = None
    if host_version is not None:
        try:
            parsed_version = HostVersion.parse(host_version)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--host-version") from exc

    if blob_type is not None:
        try:
            converter = MappingBlobConverter(_load_ref(blob_type, param_hint="--blob-type"))
        except TypeError as exc:
            raise typer.BadParameter(str(exc), param_hint="--blob-type") from exc
    else:
        converter = MappingBlobConverter()

    provider = FactorySampleProvider(
        base_type,
        factory=_load_callable(factory, param_hint="--factory"),
        teardown=_load_callable(teardown, param_hint="--teardown"),
    )
    environment = StaticHostEnvironment(
        contexts=contexts or settings.default_contexts,
        version=parsed_version,
    )
    resolver = CapabilityResolver(converter, environment)
    enumerator = ReflectiveEnumerator()

    if banner:
        print_banner(_console)

    try:
        if variant is not None:
            _, report = resolver.resolve_with_report(provider, enumerator, variant)
        else:
            _, report = resolver.resolve_for_host(provider, enumerator, settings.threshold())
    except CapabilityResolutionError as exc:
        _console.print(f"[red]Resolution failed:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    _console.print(build_observations_table(report))
    _console.print(build_capabilities_panel(report))

    if json_path is None and save_report:
        json_path = default_report_path(report=report, reports_dir=settings.reports_dir)
    if json_path is not None:
        out = export_report_json(report=report, output_path=json_path)
        _console.print(f"[green]Report saved to:[/green] {out}")


def run() -> None:
    app()
