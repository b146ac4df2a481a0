import psutil


def _mac_addresses():
    out = {}
    for name, addrs in psutil.net_if_addrs().items():
        for addr in addrs:
            if addr.family == psutil.AF_LINK:
                out[name] = addr.address
                break
    return out


def network():
    macs = _mac_addresses()
    interfaces = []
    for name, data in sorted(psutil.net_io_counters(pernic=True).items()):
        interfaces.append(
            {
                "name": name,
                "mac_address": macs.get(name) or "00:00:00:00:00:00",
                "packets_recv": data.packets_recv,
                "packets_sent": data.packets_sent,
                "errin": data.errin,
                "errout": data.errout,
            }
        )
    return interfaces


def format_network(interfaces):
    lines = ["", "Network I/O:", ""]
    for nic in interfaces:
        lines.append(
            f"[{nic['name']}]; MAC address: {nic['mac_address']}; "
            f"total packets in: {nic['packets_recv']}; total packets out: {nic['packets_sent']}"
        )
        lines.append(
            f"total errors on packets in: {nic['errin']}; total errors packets out: {nic['errout']}"
        )
        lines.append("")
    return lines
