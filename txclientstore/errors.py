# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" All errors that the client store can report. """


class ClientStoreError(Exception):
    """
    Base class of the errors reported by a client store.
    A missing client or permission list is not an error, it is reported as None.
    """
    originalError = None

    def __init__(self, message, originalError=None):
        """
        :param message: A human readable description of the error.
        :param originalError: The exception that caused this error, if any.
        """
        super(ClientStoreError, self).__init__(message)
        self.originalError = originalError

    @classmethod
    def wrap(cls, error, message=None):
        """
        Wrap an arbitrary exception into an error of this class.
        Errors that already are client store errors are returned unchanged.

        :param error: The exception to wrap.
        :param message: An optional description, defaults to the description of the error.
        :return: The client store error.
        """
        if isinstance(error, ClientStoreError):
            return error
        if message is None:
            message = '{name}: {error}'.format(name=type(error).__name__, error=error)
        return cls(message, originalError=error)


class EncodingError(ClientStoreError):
    """
    A record could not be encoded for storage, or a stored payload
    could not be decoded into the expected record shape.
    """


class BackendError(ClientStoreError):
    """
    A failure of the key value backend, e.g. a lost connection, a protocol error,
    a cancelled or a timed out request.
    """
