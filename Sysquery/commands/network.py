def spec():
    return {
        "name": "network",
        "description": "Get a network I/O digest.",
        "args": {},
    }


def run(*, client):
    return client.network()
