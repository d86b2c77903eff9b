"""In-memory Redis doubles for draft store tests"""

import redis


class FakeRedis:
    """In-memory stand-in for the few Redis commands the draft store uses"""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    def get(self, key):
        return self.data.get(key)

    def setex(self, key, ttl, value):
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
            self.ttls.pop(key, None)
        return removed

    def ping(self):
        return True


class UnavailableRedis:
    """Redis client whose every command fails as if the server were down"""

    def _fail(self, *args, **kwargs):
        raise redis.ConnectionError("Connection refused")

    get = setex = delete = ping = _fail
