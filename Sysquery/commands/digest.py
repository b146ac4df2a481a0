def spec():
    return {
        "name": "digest",
        "description": "Get a full system digest.",
        "args": {},
    }


def run(*, client):
    return client.digest()
