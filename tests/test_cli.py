"""
Contract tests for the procsnap CLI
"""

import json

from typer.testing import CliRunner

from procsnap.main import app, section_collectors


def test_snapshot_collects_proc_sections(proc_root) -> None:
    """
    Every /proc section parses from the fixture tree
    """
    runner = CliRunner()

    result = runner.invoke(app, ["snapshot", "--proc-root", str(proc_root)])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)

    sections = payload["sections"]
    assert sections["memInfo"]["total"] == 16314444
    assert [c["cpuId"] for c in sections["stat"]["cpuStats"]] == ["cpu", "cpu0", "cpu1"]
    assert len(sections["cpuInfo"]["processors"]) == 2
    assert sections["loadAvg"] == {"load1": 0.5, "load5": 0.75, "load15": 1.0}
    assert sections["networkStats"][1]["receivedBytes"] == 1000
    assert len(sections["diskStats"]) == 3
    assert sections["vmStat"] == {}
    assert sorted(sections["processIds"]) == [1, 7, 42]
    assert payload["meta"]["schemaVersion"] == "1"


def test_snapshot_reports_failed_section_and_keeps_others(proc_root) -> None:
    """
    A malformed meminfo lands in failures; --strict turns that into exit 1
    """
    (proc_root / "meminfo").write_text("MemTotal: 1: 2\n")
    runner = CliRunner()

    result = runner.invoke(app, ["snapshot", "--proc-root", str(proc_root)])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert "memInfo" not in payload["sections"]
    assert "stat" in payload["sections"]
    failed = {f["collector"]: f for f in payload["failures"]}
    assert failed["memInfo"]["errorType"] == "MalformedInput"

    events = [json.loads(line) for line in result.stderr.splitlines()]
    failed_events = [e for e in events if e["event_type"] == "collector_failed"]
    assert {"collector": "memInfo", "source": "meminfo"}.items() <= failed_events[0].items()
    assert events[-1]["event_type"] == "snapshot_shutdown"

    strict = runner.invoke(app, ["snapshot", "--proc-root", str(proc_root), "--strict"])
    assert strict.exit_code == 1


def test_snapshot_survives_non_finite_load_values(proc_root) -> None:
    """
    nan in loadavg fails that one section; the envelope still prints as valid JSON
    """
    (proc_root / "loadavg").write_text("nan 0.5 1.0 1/2 3\n")
    runner = CliRunner()

    result = runner.invoke(app, ["snapshot", "--proc-root", str(proc_root)])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert "loadAvg" not in payload["sections"]
    assert payload["sections"]["uptime"] == {"total": 350735.47, "idle": 234388.9}
    failed = {f["collector"]: f for f in payload["failures"]}
    assert failed["loadAvg"]["errorType"] == "MalformedInput"
    assert "not a finite number" in failed["loadAvg"]["message"]


def test_show_single_section(proc_root) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["show", "uptime", "--proc-root", str(proc_root)])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"total": 350735.47, "idle": 234388.9}


def test_show_missing_source_exits_non_zero(tmp_path) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["show", "stat", "--proc-root", str(tmp_path)])

    assert result.exit_code == 1
    event = json.loads(result.stderr.strip().splitlines()[-1])
    assert event["event_type"] == "collector_failed"
    assert event["error_type"] == "SourceUnavailable"
    assert event["source"] == "stat"


def test_show_unknown_section_is_usage_error() -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["show", "nope"])

    assert result.exit_code == 2


def test_pids_command(proc_root) -> None:
    runner = CliRunner()

    result = runner.invoke(app, ["pids", "--proc-root", str(proc_root)])

    assert result.exit_code == 0
    assert sorted(int(line) for line in result.stdout.split()) == [1, 7, 42]


def test_section_names_are_stable() -> None:
    assert list(section_collectors()) == [
        "memInfo",
        "stat",
        "cpuInfo",
        "loadAvg",
        "uptime",
        "networkStats",
        "diskStats",
        "vmStat",
        "processIds",
        "systemInformation",
        "kernelIdentity",
        "networkInterfaces",
        "diskUsage",
    ]
