import platform
import time

import psutil

from Sysquery.config import config

GIGABYTE = 1_073_741_824
MEGABYTE = 1_048_576


_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB", "EB")


def convert_size(size_bytes):
    """Human-readable byte count in binary units, e.g. 1536 -> '1.5 KB'."""
    size_bytes = int(size_bytes)
    if size_bytes <= 0:
        return "0B"
    exp = min((size_bytes.bit_length() - 1) // 10, len(_SIZE_UNITS) - 1)
    return f"{round(size_bytes / 1024 ** exp, 2)} {_SIZE_UNITS[exp]}"


def to_gigabytes(size_bytes):
    return "%.2f" % (size_bytes / float(GIGABYTE))


def to_megabytes(size_bytes):
    return "%.2f" % (size_bytes / float(MEGABYTE))


def _os_release_id():
    try:
        return platform.freedesktop_os_release().get("ID")
    except (AttributeError, OSError):
        return None


def _first_disk_free():
    # Only the OS disk: the first mounted partition psutil reports.
    for part in psutil.disk_partitions(all=False):
        try:
            return psutil.disk_usage(part.mountpoint).free
        except (psutil.Error, OSError):
            return None
    return None


def digest():
    vm = psutil.virtual_memory()
    interval = float(getattr(config, "cpu_sample_interval_s", 0.1))
    brand = platform.processor() or platform.machine() or "CPU"
    cpus = []
    for idx, usage in enumerate(psutil.cpu_percent(interval=interval, percpu=True)):
        cpus.append({"index": idx, "brand": brand, "usage": usage, "vendor_id": platform.machine()})
    return {
        "memory_available": vm.available,
        "memory_free": vm.free,
        "memory_total": vm.total,
        "physical_cores": psutil.cpu_count(logical=False),
        "disk_free": _first_disk_free(),
        "days_since_boot": int((time.time() - psutil.boot_time()) // 86400),
        "cpus": cpus,
        "distribution_id": _os_release_id(),
        "os_name": platform.system() or None,
        "os_version": platform.platform() or None,
    }


def format_digest(data):
    lines = ["", "Here is your system digest: ", "", "Core system information:"]
    lines.append(f"Memory available: {to_gigabytes(data['memory_available'])} gigabytes")
    lines.append(f"Unallocated memory available: {to_gigabytes(data['memory_free'])} gigabytes")
    lines.append(f"Total memory available: {to_gigabytes(data['memory_total'])} gigabytes")
    if data.get("physical_cores"):
        lines.append(f"Number of physical cores: {data['physical_cores']}")
    else:
        lines.append("Physical core count unavailable")
    if data.get("disk_free") is not None:
        lines.append(f"Disk space available: {to_gigabytes(data['disk_free'])} gigabytes")
    lines.append(f"Days since boot: {data['days_since_boot']}")

    lines.append("")
    lines.append("CPU usage:")
    for cpu in data.get("cpus") or []:
        lines.append(f"{cpu['brand']}: usage {cpu['usage']:.2f}%; Vendor ID: {cpu['vendor_id']}")

    lines.append("")
    lines.append("Operating system information:")
    lines.append(f"Distribution ID: {data.get('distribution_id') or 'unknown'}")
    if data.get("os_name"):
        lines.append(f"OS Name: {data['os_name']}")
    else:
        lines.append("OS name unavailable")
    if data.get("os_version"):
        lines.append(f"Operating system version: {data['os_version']}")
    else:
        lines.append("OS system version unavailable")
    return lines
