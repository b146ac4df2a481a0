import unittest
from types import SimpleNamespace
from unittest import mock

import psutil

from Sysquery.config import config
from Sysquery.features import network, system_stats


class ConvertSizeTests(unittest.TestCase):
    def test_convert_size(self):
        self.assertEqual(system_stats.convert_size(0), "0B")
        self.assertEqual(system_stats.convert_size(1024), "1.0 KB")
        self.assertEqual(system_stats.convert_size(1536 * 1024 * 1024), "1.5 GB")
        self.assertEqual(system_stats.convert_size(1023), "1023.0 B")
        self.assertEqual(system_stats.convert_size(1024 ** 3), "1.0 GB")
        self.assertEqual(system_stats.convert_size(2 ** 64 - 1), "16.0 EB")

    def test_fixed_units(self):
        self.assertEqual(system_stats.to_gigabytes(3 * system_stats.GIGABYTE), "3.00")
        self.assertEqual(system_stats.to_megabytes(system_stats.MEGABYTE // 2), "0.50")


class DigestTests(unittest.TestCase):
    def _patches(self, cores=4):
        vm = SimpleNamespace(available=2 * system_stats.GIGABYTE, free=system_stats.GIGABYTE, total=8 * system_stats.GIGABYTE)
        part = SimpleNamespace(mountpoint="/")
        return [
            mock.patch.object(system_stats.psutil, "virtual_memory", return_value=vm),
            mock.patch.object(system_stats.psutil, "cpu_percent", return_value=[12.5, 50.0]),
            mock.patch.object(system_stats.psutil, "cpu_count", return_value=cores),
            mock.patch.object(system_stats.psutil, "disk_partitions", return_value=[part]),
            mock.patch.object(system_stats.psutil, "disk_usage", return_value=SimpleNamespace(free=system_stats.GIGABYTE)),
            mock.patch.object(system_stats.psutil, "boot_time", return_value=0.0),
            mock.patch.object(system_stats.time, "time", return_value=3 * 86400 + 5.0),
            mock.patch.object(config, "cpu_sample_interval_s", 0.0),
        ]

    def _digest(self, cores=4):
        patches = self._patches(cores)
        for p in patches:
            p.start()
        try:
            return system_stats.digest()
        finally:
            for p in reversed(patches):
                p.stop()

    def test_digest_values(self):
        data = self._digest()
        self.assertEqual(data["memory_total"], 8 * system_stats.GIGABYTE)
        self.assertEqual(data["physical_cores"], 4)
        self.assertEqual(data["disk_free"], system_stats.GIGABYTE)
        self.assertEqual(data["days_since_boot"], 3)
        self.assertEqual([c["usage"] for c in data["cpus"]], [12.5, 50.0])

    def test_format_digest(self):
        lines = system_stats.format_digest(self._digest())
        self.assertIn("Memory available: 2.00 gigabytes", lines)
        self.assertIn("Total memory available: 8.00 gigabytes", lines)
        self.assertIn("Number of physical cores: 4", lines)
        self.assertIn("Disk space available: 1.00 gigabytes", lines)
        self.assertIn("Days since boot: 3", lines)
        self.assertTrue(any("usage 12.50%; Vendor ID: " in line for line in lines))

    def test_missing_core_count(self):
        lines = system_stats.format_digest(self._digest(cores=None))
        self.assertIn("Physical core count unavailable", lines)

    def test_missing_os_details(self):
        data = self._digest()
        data.update(os_name=None, os_version=None, distribution_id=None)
        lines = system_stats.format_digest(data)
        self.assertIn("OS name unavailable", lines)
        self.assertIn("OS system version unavailable", lines)
        self.assertIn("Distribution ID: unknown", lines)


class NetworkTests(unittest.TestCase):
    def test_interfaces(self):
        counters = {
            "eth0": SimpleNamespace(packets_recv=10, packets_sent=20, errin=1, errout=2),
            "lo": SimpleNamespace(packets_recv=5, packets_sent=5, errin=0, errout=0),
        }
        addrs = {
            "eth0": [
                SimpleNamespace(family=psutil.AF_LINK, address="aa:bb:cc:dd:ee:ff"),
            ],
            "lo": [],
        }
        with mock.patch.object(network.psutil, "net_io_counters", return_value=counters), mock.patch.object(
            network.psutil, "net_if_addrs", return_value=addrs
        ):
            data = network.network()
        self.assertEqual([n["name"] for n in data], ["eth0", "lo"])
        self.assertEqual(data[0]["mac_address"], "aa:bb:cc:dd:ee:ff")
        self.assertEqual(data[1]["mac_address"], "00:00:00:00:00:00")

        lines = network.format_network(data)
        self.assertEqual(
            lines[3],
            "[eth0]; MAC address: aa:bb:cc:dd:ee:ff; total packets in: 10; total packets out: 20",
        )
        self.assertEqual(lines[4], "total errors on packets in: 1; total errors packets out: 2")


if __name__ == "__main__":
    unittest.main()
