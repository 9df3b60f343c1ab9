"""Doctor command for environment diagnostics."""

from __future__ import annotations

import platform

import typer
from rich.console import Console
from rich.table import Table

from adapters.blobs import CompoundBlob, MappingBlobConverter
from adapters.host_environment import StaticHostEnvironment
from adapters.reflection import ReflectiveEnumerator
from adapters.samples import FactorySampleProvider
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.models import ProtocolVariant
from core.services.capability_resolver import CapabilityResolver
from core.services.state_bridge import StateBridge

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


class _DoctorSample:
    """Minimal host type with one void load, one void save and one returning save."""

    def __init__(self) -> None:
        self.name = "doctor"

    def read_state(self, blob: CompoundBlob) -> None:
        self.name = blob.get("name", self.name)

    def write_state(self, blob: CompoundBlob) -> None:
        blob["name"] = self.name

    def snapshot(self, blob: CompoundBlob) -> CompoundBlob:
        blob["name"] = self.name
        return blob


def _check_resolver(variant: ProtocolVariant) -> tuple[bool, str]:
    """Resolve the built-in sample end to end and round-trip one value."""

    try:
        converter = MappingBlobConverter()
        resolver = CapabilityResolver(converter, StaticHostEnvironment(contexts=["doctor"]))
        capabilities = resolver.resolve(
            FactorySampleProvider(_DoctorSample), ReflectiveEnumerator(), variant
        )
        bridge = StateBridge(capabilities, converter)
        sample = _DoctorSample()
        bridge.load_into(sample, {"name": "probe"})
        state = bridge.extract(sample)
        if state != {"name": "probe"}:
            return False, f"Unexpected round trip: {state!r}"
        return True, f"load={capabilities.load_operation.name} save={capabilities.save_operation.name}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics."""

    settings = AppSettings()
    threshold = settings.threshold()

    table = Table(title="state-probe Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Python", "OK", platform.python_version())
    table.add_row(
        "Version threshold",
        "OK",
        f"> {threshold.major}.x or x.{threshold.minor} -> {ProtocolVariant.RETURNING_METHOD.value}",
    )
    if settings.default_contexts:
        table.add_row("Default contexts", "OK", ", ".join(settings.default_contexts))
    else:
        table.add_row("Default contexts", "WARN", "None set -> every probe needs --context")

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    all_ok = True
    for variant in ProtocolVariant:
        ok, detail = _check_resolver(variant)
        all_ok = all_ok and ok
        table.add_row(f"Self-test ({variant.value})", "OK" if ok else "FAIL", detail)

    _console.print(table)

    if not all_ok:
        raise typer.Exit(code=1)


@app.command()
def configure(
    threshold_major: int = typer.Option(..., "--threshold-major", min=0, prompt=True),
    threshold_minor: int = typer.Option(..., "--threshold-minor", min=0, prompt=True),
) -> None:
    """Store the protocol version threshold in the user config .env."""

    env_path = write_user_env_vars(
        {
            "STATE_PROBE_THRESHOLD_MAJOR": str(threshold_major),
            "STATE_PROBE_THRESHOLD_MINOR": str(threshold_minor),
        }
    )
    _console.print(f"[green]Saved threshold config to:[/green] {env_path}")
