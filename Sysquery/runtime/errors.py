_MAP = {
    "directory_unreachable": "Current working directory is unreachable.",
    "process_enumeration_failed": "Could not enumerate running processes.",
    "invalid_argument": "One of the arguments is invalid.",
    "unknown_command": "That command does not exist.",
    "execution_failed": "The requested command failed while executing.",
}


def humanize(error_code, details=""):
    code = str(error_code or "").strip()
    msg = _MAP.get(code, "An unexpected error occurred.")
    if details:
        return f"{msg} ({details})"
    return msg


class SourceUnavailableError(Exception):
    """A whole input source (directory tree, process table) could not be read."""

    def __init__(self, code, details=""):
        self.code = str(code or "")
        self.details = str(details or "")
        super().__init__(humanize(self.code, self.details))


class MetricUnavailableError(Exception):
    """The metric of a single record could not be obtained; the record is skipped."""


class TopKInvariantError(RuntimeError):
    pass
