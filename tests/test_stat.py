"""
Contract tests for /proc/stat parsing
"""

import math

import pytest

from conftest import read_fixture
from procsnap.collectors.stat import compute_usage, get_stat, parse_stat
from procsnap.errors import MalformedInput


def test_parse_stat_fixture() -> None:
    """
    Aggregate row first, per-core rows after, scalars filled, other keys ignored
    """
    stat = parse_stat(read_fixture("stat"))

    assert [c.cpu_id for c in stat.cpu_stats] == ["cpu", "cpu0", "cpu1"]
    assert stat.cpu_stats[0].is_aggregate
    assert not stat.cpu_stats[1].is_aggregate
    assert stat.boot_time == 1700000000
    assert stat.processes == 4321
    assert stat.processes_running == 2
    assert stat.processes_blocked == 1


def test_eight_token_cpu_line_defaults_optional_buckets_to_zero() -> None:
    """
    `cpu  100 0 50 850 0 0 0` -> total 1000, usage 15%
    """
    cpu = parse_stat("cpu  100 0 50 850 0 0 0\n").cpu_stats[0]

    assert (cpu.steal, cpu.guest, cpu.guest_nice) == (0, 0, 0)
    assert cpu.total == 1000
    assert cpu.idle == 850
    assert cpu.usage == 15.0


def test_total_includes_every_present_bucket() -> None:
    cpu = parse_stat("cpu3 1 2 3 4 5 6 7 8 9 10\n").cpu_stats[0]

    assert cpu.total == 55
    assert cpu.guest_nice == 10
    assert cpu.usage == pytest.approx((55 - 4) / 55 * 100)


def test_zero_total_gives_unknown_usage() -> None:
    """
    Nothing accounted -> NaN, serialized as null rather than 0
    """
    cpu = parse_stat("cpu 0 0 0 0 0 0 0\n").cpu_stats[0]

    assert math.isnan(cpu.usage)
    assert cpu.to_dict()["usage"] is None
    assert math.isnan(compute_usage(0, 0))


@pytest.mark.parametrize(
    "content",
    [
        "cpu 1 2 3 4 5 6\n",
        "cpu 1 2 3 4 5 6 7 8 9 10 11\n",
        "cpu 1 2 x 4 5 6 7\n",
        "cpu 1 2 3 4 5 6 7 steal\n",
        "btime\n",
        "processes 1 2\n",
        "procs_running many\n",
    ],
)
def test_malformed_stat(content: str) -> None:
    with pytest.raises(MalformedInput) as excinfo:
        parse_stat(content)
    assert excinfo.value.source == "stat"


def test_unobserved_scalars_are_none() -> None:
    stat = parse_stat("cpu 1 1 1 1 1 1 1\nctxt 10\n")

    assert stat.boot_time is None
    assert stat.to_dict()["processesBlocked"] is None


def test_to_dict_keys() -> None:
    payload = parse_stat(read_fixture("stat")).to_dict()

    assert set(payload) == {"cpuStats", "bootTime", "processes", "processesRunning", "processesBlocked"}
    assert set(payload["cpuStats"][0]) == {
        "cpuId",
        "user",
        "nice",
        "system",
        "idle",
        "ioWait",
        "irq",
        "softIrq",
        "steal",
        "guest",
        "guestNice",
        "total",
        "usage",
    }


def test_get_stat_reads_from_proc_root(proc_root) -> None:
    assert len(get_stat(proc_root=proc_root).cpu_stats) == 3
