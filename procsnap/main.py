"""
procsnap.main
------------
AUTHOR: carter-vin

CLI entrypoint
- `procsnap snapshot` collects every section into one versioned JSON envelope
- `procsnap show NAME` prints a single section
- `procsnap pids` lists process ids
- `procsnap version` prints tool version & runtime

Snapshot JSON goes to stdout; event lines go to stderr.
"""

from __future__ import annotations

import platform
import sys
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Optional

import typer

from procsnap import __version__
from procsnap.collectors.base import run_collector
from procsnap.collectors.cpuinfo import get_cpu_info
from procsnap.collectors.disk import get_disk_stats, get_disk_usage
from procsnap.collectors.kernel import get_kernel_identity, get_system_information
from procsnap.collectors.load import get_load_avg, get_uptime
from procsnap.collectors.memory import get_mem_info
from procsnap.collectors.network import get_network_interfaces, get_network_stats
from procsnap.collectors.processes import list_process_ids
from procsnap.collectors.stat import get_stat
from procsnap.collectors.vmstat import get_vm_stat
from procsnap.errors import SysInfoError
from procsnap.logging import emit_collector_failed, emit_event
from procsnap.model import build_snapshot, snapshot_to_json, to_json, to_payload, utc_now_iso

# Explicit multi-command CLI
app = typer.Typer(
    add_completion=False,
    help="procsnap: point-in-time host metrics from /proc",
)

TOOL_VERSION = __version__

PROC_ROOT_OPTION = typer.Option(
    None,
    "--proc-root",
    help="Pseudo-filesystem root (default: $PROCSNAP_PROC_ROOT or /proc).",
)
PRETTY_OPTION = typer.Option(False, "--pretty", help="Indent JSON output.")
DISK_PATH_OPTION = typer.Option("/", "--path", help="Path whose filesystem capacity is reported.")


# -----------------------------
# DATA CLASSES
# -----------------------------
@dataclass(frozen=True)
class EnvironmentInfo:
    """
    Snapshot of the runtime environment
    """

    python_version: str
    os: str
    machine: str
    utc_now: str


def collect_environment_info() -> EnvironmentInfo:
    return EnvironmentInfo(
        python_version=sys.version.split()[0],
        os=f"{platform.system()} {platform.release()}",
        machine=platform.machine(),
        utc_now=utc_now_iso(),
    )


def section_collectors(
    *, proc_root: Optional[str] = None, disk_path: str = "/"
) -> dict[str, Callable[[], Any]]:
    """
    Section name -> zero-argument collector

    Order here is the order sections are collected in
    """
    return {
        "memInfo": partial(get_mem_info, proc_root=proc_root),
        "stat": partial(get_stat, proc_root=proc_root),
        "cpuInfo": partial(get_cpu_info, proc_root=proc_root),
        "loadAvg": partial(get_load_avg, proc_root=proc_root),
        "uptime": partial(get_uptime, proc_root=proc_root),
        "networkStats": partial(get_network_stats, proc_root=proc_root),
        "diskStats": partial(get_disk_stats, proc_root=proc_root),
        "vmStat": partial(get_vm_stat, proc_root=proc_root),
        "processIds": partial(list_process_ids, proc_root=proc_root),
        "systemInformation": get_system_information,
        "kernelIdentity": get_kernel_identity,
        "networkInterfaces": get_network_interfaces,
        "diskUsage": partial(get_disk_usage, disk_path),
    }


# -----------------------------
# ROOT COMMAND BEHAVIOR
# -----------------------------
@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """
    Root command behavior.

    Without a subcommand, print a short hint and exit 0.
    """
    if ctx.invoked_subcommand is None:
        typer.echo("No command provided. Try: procsnap --help")


# -----------------------------
# CLI COMMANDS
# -----------------------------
@app.command()
def version() -> None:
    """
    Print tool version & runtime env
    """
    env = collect_environment_info()

    typer.echo(f"procsnap v{TOOL_VERSION}")
    typer.echo(f"python={env.python_version}")
    typer.echo(f"os={env.os}")
    typer.echo(f"machine={env.machine}")
    typer.echo(f"utc_now={env.utc_now}")


@app.command("snapshot")
def snapshot(
    proc_root: Optional[str] = PROC_ROOT_OPTION,
    disk_path: str = DISK_PATH_OPTION,
    pretty: bool = PRETTY_OPTION,
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit 1 when any section failed to collect.",
    ),
) -> None:
    """
    Collect every section and print one snapshot

    Failure semantics:
    - a failing section is listed under `failures`, the rest still emit
    - exit 0 unless --strict and something failed
    """
    emit_event(
        "snapshot_start",
        tool_version=TOOL_VERSION,
        proc_root=proc_root,
    )

    try:
        outcomes = [
            run_collector(name, fn)
            for name, fn in section_collectors(proc_root=proc_root, disk_path=disk_path).items()
        ]

        for outcome in outcomes:
            if not outcome.ok:
                emit_collector_failed(outcome, tool_version=TOOL_VERSION)

        result = build_snapshot(outcomes, collected_at=utc_now_iso(), tool_version=TOOL_VERSION)
        snapshot_json = snapshot_to_json(result, pretty=pretty)
        typer.echo(snapshot_json)

        emit_event(
            "snapshot_emitted",
            tool_version=TOOL_VERSION,
            sections=len(result.sections),
            failures=len(result.failures),
            bytes=len(snapshot_json),
        )

    finally:
        emit_event("snapshot_shutdown", tool_version=TOOL_VERSION)

    if strict and result.failures:
        raise typer.Exit(code=1)


@app.command("show")
def show(
    name: str = typer.Argument(..., help="Section name, e.g. memInfo, stat, cpuInfo."),
    proc_root: Optional[str] = PROC_ROOT_OPTION,
    disk_path: str = DISK_PATH_OPTION,
    pretty: bool = PRETTY_OPTION,
) -> None:
    """
    Print a single section
    """
    collectors = section_collectors(proc_root=proc_root, disk_path=disk_path)
    if name not in collectors:
        raise typer.BadParameter(
            f"unknown section {name!r}; choose from: {', '.join(collectors)}",
            param_hint="NAME",
        )

    outcome = run_collector(name, collectors[name])
    if not outcome.ok:
        emit_collector_failed(outcome, tool_version=TOOL_VERSION)
        raise typer.Exit(code=1)

    typer.echo(to_json(to_payload(outcome.value), pretty=pretty))


@app.command("pids")
def pids(proc_root: Optional[str] = PROC_ROOT_OPTION) -> None:
    """
    Print one process id per line, in directory order
    """
    try:
        ids = list_process_ids(proc_root=proc_root)
    except SysInfoError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    for pid in ids:
        typer.echo(str(pid))


if __name__ == "__main__":
    app()
