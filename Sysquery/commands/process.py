def spec():
    return {
        "name": "process",
        "description": "Get the current processes expending the most memory.",
        "args": {"numprocesses": "number", "strategy": "string"},
    }


def run(*, client, numprocesses=None, strategy=""):
    return client.processes(numprocesses, strategy=strategy or None)
