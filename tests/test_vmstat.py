"""
Contract test for the vmstat placeholder record
"""

import pytest

from procsnap.collectors.vmstat import VMStat, get_vm_stat, parse_vmstat
from procsnap.errors import SourceUnavailable


def test_vmstat_has_no_fields_yet(proc_root) -> None:
    assert parse_vmstat("pgpgin 1\n") == VMStat()
    assert get_vm_stat(proc_root=proc_root).to_dict() == {}


def test_vmstat_still_requires_the_file(tmp_path) -> None:
    with pytest.raises(SourceUnavailable):
        get_vm_stat(proc_root=tmp_path)
