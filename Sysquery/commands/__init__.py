import time

from Sysquery.runtime import log_event, metrics_inc, metrics_observe_ms
from Sysquery.runtime.errors import SourceUnavailableError, TopKInvariantError

from . import digest
from . import largefiles
from . import network
from . import process


_COMMAND_MODULES = [
    largefiles,
    digest,
    network,
    process,
]


COMMAND_SPECS = [dict(m.spec(), args=dict(m.spec().get("args") or {})) for m in _COMMAND_MODULES]


def get_command_spec(name):
    for spec in COMMAND_SPECS:
        if spec.get("name") == name:
            return spec
    return None


def list_commands():
    return [spec["name"] for spec in COMMAND_SPECS]


def run_command(*, name, args=None, client):
    args = args or {}

    for m in _COMMAND_MODULES:
        if m.spec().get("name") != name:
            continue
        clean = _sanitize_args(get_command_spec(name), args)
        log_event("command_start", command=name, args=clean)
        started = time.perf_counter()
        try:
            data = m.run(client=client, **clean)
        except SourceUnavailableError as e:
            metrics_inc(f"command.{name}.error")
            return {
                "ok": False,
                "command": name,
                "error_code": e.code,
                "details": e.details,
            }
        except TopKInvariantError:
            raise
        except ValueError as e:
            metrics_inc(f"command.{name}.error")
            return {
                "ok": False,
                "command": name,
                "error_code": "invalid_argument",
                "details": str(e),
            }
        except Exception as e:
            metrics_inc(f"command.{name}.error")
            log_event("command_failed", command=name, error=type(e).__name__, details=str(e))
            return {
                "ok": False,
                "command": name,
                "error_code": "execution_failed",
                "details": str(e),
            }
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        metrics_inc(f"command.{name}.ok")
        metrics_observe_ms(f"command.{name}", elapsed_ms)
        log_event("command_done", command=name, elapsed_ms=round(elapsed_ms, 3))
        return {"ok": True, "command": name, "data": data}

    return {"ok": False, "command": name, "error_code": "unknown_command", "details": str(name)}


def _coerce_value(value, expected_type):
    t = str(expected_type or "").strip().lower()
    if not t or value is None:
        return value

    if t in ("string", "str"):
        return str(value)

    if t in ("number", "int", "integer", "float"):
        if isinstance(value, (int, float)):
            return value
        s = str(value).strip()
        try:
            if "." in s:
                return float(s)
            return int(s)
        except ValueError:
            return value

    return value


def _sanitize_args(spec, args):
    args_spec = (spec or {}).get("args") or {}
    incoming = args or {}
    clean = {}
    for k, expected_type in args_spec.items():
        if k not in incoming or incoming.get(k) is None:
            continue
        clean[k] = _coerce_value(incoming.get(k), expected_type)
    return clean
