import os

from Sysquery.config import config
from Sysquery.runtime.errors import SourceUnavailableError


class SysQuery:
    def __init__(self, start_dir=None):
        self._start_dir = start_dir

    def start_dir(self):
        """Directory scanned by largest_files when no path is given (cwd by default)."""
        if self._start_dir:
            return self._start_dir
        try:
            return os.getcwd()
        except OSError as e:
            raise SourceUnavailableError("directory_unreachable", str(e)) from e

    def digest(self):
        from Sysquery.features import system_stats

        return system_stats.digest()

    def network(self):
        from Sysquery.features import network

        return network.network()

    def processes(self, n=None, strategy=None):
        from Sysquery.features import processes

        if n is None:
            n = int(getattr(config, "default_num_processes", 10))
        return processes.top_processes(n, strategy=strategy)

    def largest_files(self, n=None, start_dir=None, strategy=None):
        from Sysquery.features import large_files

        if n is None:
            n = int(getattr(config, "default_num_files", 5))
        return large_files.find_largest_files(start_dir or self.start_dir(), n, strategy=strategy)
