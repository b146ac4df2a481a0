import json

from Sysquery import SysQuery
from Sysquery.commands import run_command
from Sysquery.runtime import metrics_snapshot, recent_events, set_run_id


def _jsonable(value):
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    payload = getattr(value, "payload", None)
    if payload is not None:
        return {"payload": vars(payload), "metric": value.metric}
    return value


def main():
    run_id = set_run_id()
    client = SysQuery()
    checks = [
        ("digest", {}),
        ("network", {}),
        ("process", {"numprocesses": 3}),
        ("largefiles", {"numfiles": 3}),
    ]
    report = {}
    for name, args in checks:
        r = run_command(name=name, args=args, client=client)
        report[name] = {
            "ok": bool(r.get("ok")),
            "error_code": r.get("error_code", ""),
            "data": _jsonable(r.get("data")),
        }
    report["metrics"] = metrics_snapshot()
    report["events"] = recent_events(limit=50, run_id=run_id)
    print(json.dumps(report, ensure_ascii=False, indent=2, default=str))


if __name__ == "__main__":
    main()
