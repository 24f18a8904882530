# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" The contract a key value storage must fulfill to back a client store. """

from abc import ABCMeta, abstractmethod


class KeyValueBackend(metaclass=ABCMeta):
    """
    A key value storage. Keys are strings, values are bytes.
    All operations return Deferreds. Failures are reported via the errback chain,
    preferably as a txclientstore.errors.BackendError.
    Cancelling a returned Deferred must not block the caller.
    """

    @abstractmethod
    def get(self, key):
        """
        Return the value that was stored with the given key.

        :param key: The key of the value.
        :return: A Deferred that fires with the stored bytes or fails with a
                 KeyError, if no value is stored with the key.
        """
        raise NotImplementedError()

    @abstractmethod
    def transaction(self):
        """
        :return: A new Transaction that applies the operations queued on it as a whole.
        """
        raise NotImplementedError()

    @abstractmethod
    def delete(self, key):
        """
        Delete the value that was stored with the given key.
        Deleting a key that does not exist succeeds.

        :param key: The key of the value.
        :return: A Deferred that fires once the value is deleted.
        """
        raise NotImplementedError()

    @abstractmethod
    def close(self):
        """
        Release the connection to the storage.
        :return: A Deferred that fires once the connection is released.
        """
        raise NotImplementedError()


class Transaction(metaclass=ABCMeta):
    """
    A batch of write operations. The operations are only queued until execute is called,
    then they are applied all at once or not at all.
    """

    @abstractmethod
    def set(self, key, value, ttl=0):
        """
        Queue storing the value with the given key, replacing any previous value.

        :param key: The key of the value.
        :param value: The value as bytes.
        :param ttl: The lifetime of the value in seconds, 0 for no expiration.
        """
        raise NotImplementedError()

    @abstractmethod
    def execute(self):
        """
        Apply all queued operations.
        :return: A Deferred that fires once all operations have been applied.
        """
        raise NotImplementedError()
