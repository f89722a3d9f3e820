"""procsnap.collectors package exports."""

from procsnap.collectors.cpuinfo import CPUInformation, ProcessorInfo, get_cpu_info, parse_cpuinfo
from procsnap.collectors.disk import DiskStat, DiskUsage, get_disk_stats, get_disk_usage, parse_diskstats
from procsnap.collectors.kernel import (
    KernelIdentity,
    SystemInformation,
    get_kernel_identity,
    get_system_information,
)
from procsnap.collectors.load import Load, Uptime, get_load_avg, get_uptime, parse_loadavg, parse_uptime
from procsnap.collectors.memory import MemoryInfo, get_mem_info, parse_meminfo
from procsnap.collectors.network import (
    NetworkInterface,
    NetworkStat,
    get_network_interfaces,
    get_network_stats,
    parse_network_stats,
)
from procsnap.collectors.processes import list_process_ids
from procsnap.collectors.stat import CPUStat, SystemStat, get_stat, parse_stat
from procsnap.collectors.vmstat import VMStat, get_vm_stat, parse_vmstat

__all__ = [
    "CPUInformation",
    "CPUStat",
    "DiskStat",
    "DiskUsage",
    "KernelIdentity",
    "Load",
    "MemoryInfo",
    "NetworkInterface",
    "NetworkStat",
    "ProcessorInfo",
    "SystemInformation",
    "SystemStat",
    "Uptime",
    "VMStat",
    "get_cpu_info",
    "get_disk_stats",
    "get_disk_usage",
    "get_kernel_identity",
    "get_load_avg",
    "get_mem_info",
    "get_network_interfaces",
    "get_network_stats",
    "get_stat",
    "get_system_information",
    "get_uptime",
    "get_vm_stat",
    "list_process_ids",
    "parse_cpuinfo",
    "parse_diskstats",
    "parse_loadavg",
    "parse_meminfo",
    "parse_network_stats",
    "parse_stat",
    "parse_uptime",
    "parse_vmstat",
]
