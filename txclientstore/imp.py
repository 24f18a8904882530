# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Implementations of the key value backends a client store can use. """

import time

import redis

from twisted.internet.defer import succeed, fail
from twisted.internet.threads import deferToThreadPool

from txclientstore.backend import KeyValueBackend, Transaction
from txclientstore.errors import BackendError, ClientStoreError


class DictBackend(KeyValueBackend):
    """
    A backend that keeps all values in a dict. Values will not survive a server restart,
    so this implementation should probably only be used for testing
    or by a single process that can live with that.
    """
    closed = False

    def __init__(self):
        super(DictBackend, self).__init__()
        self.storage = {}

    def get(self, key):
        if self.closed:
            return fail(BackendError('The backend is closed'))
        entry = self.storage.get(key)
        if entry is None or self._hasExpired(key):
            return fail(KeyError(key))
        return succeed(entry['data'])

    def transaction(self):
        return DictTransaction(self)

    def delete(self, key):
        if self.closed:
            return fail(BackendError('The backend is closed'))
        self.storage.pop(key, None)
        return succeed(None)

    def close(self):
        self.closed = True
        return succeed(None)

    def put(self, key, value, ttl=0):
        """
        Store a value immediately.
        :param key: The key of the value.
        :param value: The value as bytes.
        :param ttl: The lifetime of the value in seconds, 0 for no expiration.
        """
        if not isinstance(value, bytes):
            raise ValueError('Expected the value to be bytes, got ' + str(type(value)))
        self.storage[key] = {
            'data': value,
            'expires': None if ttl <= 0 else time.time() + ttl
        }

    def _hasExpired(self, key):
        """
        Check if a value has expired and remove it if necessary.
        :param key: The key of the value.
        :return: True if the value has expired.
        """
        expireTime = self.storage[key]['expires']
        if expireTime is not None and time.time() > expireTime:
            del self.storage[key]
            return True
        return False


class DictTransaction(Transaction):
    """ A transaction of a DictBackend. The queued operations are applied in one go. """

    def __init__(self, backend):
        super(DictTransaction, self).__init__()
        self._backend = backend
        self._operations = []

    def set(self, key, value, ttl=0):
        self._operations.append((key, value, ttl))

    def execute(self):
        if self._backend.closed:
            return fail(BackendError('The backend is closed'))
        for _, value, _ in self._operations:
            if not isinstance(value, bytes):
                return fail(BackendError(
                    'Expected the value to be bytes, got ' + str(type(value))))
        for key, value, ttl in self._operations:
            self._backend.put(key, value, ttl)
        self._operations = []
        return succeed(None)


class RedisBackend(KeyValueBackend):
    """
    A backend that stores the values in Redis using a redis-py client.
    The blocking calls of the client are run in the thread pool of the reactor.
    Works with a redis.Redis as well as a redis.RedisCluster client.
    """

    def __init__(self, client, reactor=None, threadPool=None):
        """
        :raises ValueError: If the client is None.
        :param client: A redis-py client.
        :param reactor: The reactor to use, defaults to the global reactor.
        :param threadPool: The thread pool to run the blocking calls in,
                           defaults to the thread pool of the reactor.
        """
        super(RedisBackend, self).__init__()
        if client is None:
            raise ValueError('The redis client cannot be None')
        if reactor is None:
            from twisted.internet import reactor
        self.client = client
        self._reactor = reactor
        self._threadPool = threadPool

    @classmethod
    def fromOptions(cls, options, **kwargs):
        """
        Create a backend connected to a single Redis server.
        :raises ValueError: If options is None.
        :param options: A dict of keyword arguments for redis.Redis.
        :param kwargs: Additional arguments for the backend.
        :return: The new backend.
        """
        if options is None:
            raise ValueError('The redis options cannot be None')
        return cls(redis.Redis(**options), **kwargs)

    @classmethod
    def fromClusterOptions(cls, options, **kwargs):
        """
        Create a backend connected to a Redis cluster.
        :raises ValueError: If options is None.
        :param options: A dict of keyword arguments for redis.RedisCluster.
        :param kwargs: Additional arguments for the backend.
        :return: The new backend.
        """
        if options is None:
            raise ValueError('The redis cluster options cannot be None')
        return cls(redis.RedisCluster(**options), **kwargs)

    @classmethod
    def fromUrl(cls, url, **kwargs):
        """
        Create a backend connected to the Redis server at the url.
        :param url: A redis://, rediss:// or unix:// url.
        :param kwargs: Additional arguments for the backend.
        :return: The new backend.
        """
        return cls(redis.Redis.from_url(url), **kwargs)

    def get(self, key):
        return self._runInThread(self._get, key)

    def transaction(self):
        return RedisTransaction(self._runInThread, self._executeOperations)

    def delete(self, key):
        return self._runInThread(self.client.delete, key).addCallback(lambda _: None)

    def close(self):
        return self._runInThread(self.client.close)

    def _get(self, key):
        value = self.client.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def _executeOperations(self, operations):
        if len(operations) == 0:
            return None
        with self.client.pipeline(transaction=True) as pipeline:
            for key, value, ttl in operations:
                pipeline.set(key, value, ex=ttl if ttl > 0 else None)
            pipeline.execute()
        return None

    def _runInThread(self, function, *args):
        """
        Run the blocking function in the thread pool.
        Failures other than a missing key are reported as a BackendError.

        :param function: The function to run.
        :param args: The arguments for the function.
        :return: A Deferred that fires with the result of the function.
        """
        threadPool = self._threadPool
        if threadPool is None:
            threadPool = self._reactor.getThreadPool()
        result = deferToThreadPool(self._reactor, threadPool, function, *args)
        result.addErrback(self._translateFailure)
        return result

    @staticmethod
    def _translateFailure(failure):
        if failure.check(KeyError, ClientStoreError):
            return failure
        raise BackendError.wrap(failure.value)


class RedisTransaction(Transaction):
    """ A transaction that is executed as a MULTI/EXEC block by a RedisBackend. """

    def __init__(self, runInThread, executeOperations):
        """
        :param runInThread: Runs a blocking function in a thread and returns a Deferred.
        :param executeOperations: Applies a list of (key, value, ttl) set operations.
        """
        super(RedisTransaction, self).__init__()
        self._runInThread = runInThread
        self._executeOperations = executeOperations
        self._operations = []

    def set(self, key, value, ttl=0):
        self._operations.append((key, value, ttl))

    def execute(self):
        operations, self._operations = self._operations, []
        return self._runInThread(self._executeOperations, operations)
