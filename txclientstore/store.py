# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" A client storage that keeps clients and their permissions in a key value backend. """

import logging

from twisted.internet.defer import succeed, fail, maybeDeferred, CancelledError

from txclientstore.clients import ClientStorage
from txclientstore.codec import encodeClient, decodeClient, encodePermissions, \
    decodePermissions
from txclientstore.errors import BackendError, EncodingError

CLIENT_INFO = 'client-info:'
CLIENT_PERMISSIONS = 'client-permissions:'


class ClientStore(ClientStorage):
    """
    Stores clients and their permissions as json in a key value backend.

    Every key is built as keyNamespace + entity prefix + client id, so multiple stores
    can share one backend as long as they use different namespaces.
    Client ids are not escaped.

    Each operation is exactly one request to the backend. Cancelling the Deferred
    returned by an operation cancels that request and fails the Deferred
    with a BackendError. Nothing is retried.
    """
    _logger = logging.getLogger('txClientStore')

    def __init__(self, backend, keyNamespace='', clock=None):
        """
        :param backend: The KeyValueBackend to store the data in.
        :param keyNamespace: A prefix for all keys written by this store.
        :param clock: The IReactorTime used for timeouts, defaults to the global reactor.
        """
        super(ClientStore, self).__init__()
        if backend is None:
            raise ValueError('The backend cannot be None')
        if clock is None:
            from twisted.internet import reactor as clock
        self.backend = backend
        self.keyNamespace = keyNamespace
        self._clock = clock

    def createClient(self, client, timeout=None):
        try:
            payload = encodeClient(client)
        except EncodingError as error:
            return fail(error)
        return self._write(CLIENT_INFO, client.id, payload, timeout)

    def getByID(self, clientId, timeout=None):
        return self._read(CLIENT_INFO, clientId, decodeClient, timeout)

    def removeClientInfoById(self, clientId, timeout=None):
        key = self._wrapKey(CLIENT_INFO + clientId)

        def onNotFound(failure):
            failure.trap(KeyError)

        result = self._request(timeout, self.backend.delete, key)
        return result.addCallbacks(lambda _: None, onNotFound)

    def createClientPermission(self, clientId, permissions, timeout=None):
        try:
            payload = encodePermissions(permissions)
        except EncodingError as error:
            return fail(error)
        return self._write(CLIENT_PERMISSIONS, clientId, payload, timeout)

    def getPermissionByID(self, clientId, timeout=None):
        return self._read(CLIENT_PERMISSIONS, clientId, decodePermissions, timeout)

    def close(self):
        return self._request(None, self.backend.close)

    def _wrapKey(self, key):
        return self.keyNamespace + key

    def _write(self, prefix, clientId, payload, timeout):
        """
        Store the payload in one transaction.
        Nothing is written if the client id is empty.

        :param prefix: The prefix of the entity that is written.
        :param clientId: The client id.
        :param payload: The encoded entity.
        :param timeout: Seconds after which the request is cancelled, or None.
        :return: A Deferred that fires with None once the transaction has been executed.
        """
        if clientId == '':
            self._logger.debug('Not storing %s entry with an empty client id', prefix)
            return succeed(None)
        key = self._wrapKey(prefix + clientId)
        transaction = self.backend.transaction()
        transaction.set(key, payload, ttl=0)

        def onStored(_):
            self._logger.debug('Stored %s', key)

        result = self._request(timeout, transaction.execute, allowMissing=False)
        return result.addCallback(onStored)

    def _read(self, prefix, clientId, decode, timeout):
        """
        Read and decode an entity.

        :param prefix: The prefix of the entity that is read.
        :param clientId: The client id.
        :param decode: The function that decodes the payload.
        :param timeout: Seconds after which the request is cancelled, or None.
        :return: A Deferred that fires with the decoded entity or None, if it was not found.
        """
        key = self._wrapKey(prefix + clientId)

        def onFound(payload):
            try:
                return decode(payload)
            except EncodingError as error:
                self._logger.warning('Unable to decode %s: %s', key, error)
                raise

        def onNotFound(failure):
            failure.trap(KeyError)
            self._logger.debug('%s was not found', key)

        result = self._request(timeout, self.backend.get, key)
        return result.addCallbacks(onFound, onNotFound)

    def _request(self, timeout, method, *args, allowMissing=True):
        """
        Issue a request to the backend. All failures are reported as a BackendError,
        except for a missing key, which is reported as a KeyError if allowMissing is True.

        :param timeout: Seconds after which the request is cancelled, or None.
        :param method: The backend method to call.
        :param args: The arguments for the method.
        :param allowMissing: Whether a KeyError of the backend is passed on.
        :return: The Deferred of the request.
        """
        result = maybeDeferred(method, *args)
        if timeout is not None:
            result.addTimeout(timeout, self._clock)

        def onFailure(failure):
            if allowMissing and failure.check(KeyError):
                return failure
            raise self._toBackendError(failure.value)

        return result.addErrback(onFailure)

    @staticmethod
    def _toBackendError(error):
        if isinstance(error, CancelledError):
            return BackendError('The request was cancelled', originalError=error)
        return BackendError.wrap(error)
