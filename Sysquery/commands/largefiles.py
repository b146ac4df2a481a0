def spec():
    return {
        "name": "largefiles",
        "description": "Find the largest files in the current working directory.",
        "args": {"numfiles": "number", "path": "string", "strategy": "string"},
    }


def run(*, client, numfiles=None, path="", strategy=""):
    return client.largest_files(numfiles, start_dir=path or None, strategy=strategy or None)
