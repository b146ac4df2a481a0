import unittest
from types import SimpleNamespace
from unittest import mock

import psutil

from Sysquery.config import config
from Sysquery.features import processes
from Sysquery.runtime.errors import SourceUnavailableError


class _FakeProc:
    def __init__(self, pid, name, rss, status="running", io=None, info=True):
        self.pid = pid
        self._name = name
        self._rss = rss
        self._status = status
        self._io = io
        if info:
            mem = SimpleNamespace(rss=rss) if rss is not None else None
            self.info = {"name": name, "memory_info": mem, "status": status}

    def name(self):
        return self._name

    def status(self):
        return self._status

    def memory_info(self):
        if self._rss is None:
            raise psutil.AccessDenied(self.pid)
        return SimpleNamespace(rss=self._rss)

    def io_counters(self):
        if self._io is None:
            raise psutil.AccessDenied(self.pid)
        return SimpleNamespace(read_bytes=self._io[0], write_bytes=self._io[1])


class ProcessRankingTests(unittest.TestCase):
    def setUp(self):
        patcher = mock.patch.object(config, "runtime_log_enabled", "0")
        patcher.start()
        self.addCleanup(patcher.stop)
        self.procs = [
            _FakeProc(1, "init", 10, io=(5, 6)),
            _FakeProc(2, "shell", 3),
            _FakeProc(3, "ghost", None),
            _FakeProc(4, "editor", 1, status="sleeping"),
            _FakeProc(5, "browser", 9, io=(1 << 30, 2 << 30)),
        ]

    def _patch_iter(self, procs):
        return mock.patch.object(processes.psutil, "process_iter", return_value=iter(procs))

    def test_top_processes_by_memory(self):
        with self._patch_iter(self.procs):
            result = processes.top_processes(3)
        self.assertEqual([i.payload.name for i in result], ["init", "browser", "shell"])
        self.assertEqual([i.metric for i in result], [10, 9, 3])

    def test_denied_process_is_skipped(self):
        with self._patch_iter(self.procs):
            result = processes.top_processes(255)
        self.assertEqual(len(result), 4)
        self.assertNotIn("ghost", [i.payload.name for i in result])

    def test_strategies_agree(self):
        with self._patch_iter(self.procs):
            collected = processes.top_processes(2, strategy="collect")
        with self._patch_iter(self.procs):
            bounded = processes.top_processes(2, strategy="bounded")
        self.assertEqual([i.metric for i in collected], [i.metric for i in bounded])

    def test_io_counters_fall_back_to_zero(self):
        with self._patch_iter(self.procs):
            result = processes.top_processes(255)
        by_name = {i.payload.name: i.payload for i in result}
        self.assertEqual((by_name["init"].read_bytes, by_name["init"].written_bytes), (5, 6))
        self.assertEqual((by_name["shell"].read_bytes, by_name["shell"].written_bytes), (0, 0))

    def test_measure_without_prefetched_info(self):
        item = processes.measure_process(_FakeProc(9, "plain", 42, info=False))
        self.assertEqual(item.metric, 42)
        self.assertEqual(item.payload.name, "plain")

    def test_enumeration_failure_is_a_source_error(self):
        with mock.patch.object(processes.psutil, "process_iter", side_effect=psutil.AccessDenied()):
            with self.assertRaises(SourceUnavailableError) as ctx:
                processes.top_processes(5)
        self.assertEqual(ctx.exception.code, "process_enumeration_failed")

    def test_empty_process_table(self):
        with self._patch_iter([]):
            self.assertEqual(processes.top_processes(5), [])

    def test_format_processes(self):
        with self._patch_iter(self.procs):
            result = processes.top_processes(1, strategy="collect")
        with self._patch_iter([self.procs[4]]):
            browser = processes.top_processes(1)
        self.assertTrue(processes.format_processes(result)[3].startswith("[init]: memory usage: 0.00"))
        lines = processes.format_processes(browser)
        self.assertIn("total disk reads: 1.00 gigabytes; total disk writes: 2.00 gigabytes;", lines[4])
        self.assertEqual(lines[5], "[browser]: status: running ")


if __name__ == "__main__":
    unittest.main()
