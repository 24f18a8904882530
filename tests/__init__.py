import threading

from uuid import uuid4

from twisted.trial.unittest import TestCase
from twisted.internet.defer import Deferred, succeed

from txclientstore import GrantTypes
from txclientstore.backend import KeyValueBackend, Transaction
from txclientstore.clients import Client, PasswordClient, ClientPermission
from txclientstore.imp import DictBackend


class classProperty(object):
    """ @property for class variables. """
    def __init__(self, func):
        self.func = classmethod(func)

    def __get__(self, *args):
        # noinspection PyCallingNonCallable
        return self.func.__get__(*args)()


class TwistedTestCase(TestCase):
    """ An abstract base class for the test cases. """
    longMessage = True

    @classProperty
    def __test__(self):
        return not (self.__name__.startswith('Abstract') or self.__name__ == 'TwistedTestCase')


class RecordingBackend(DictBackend):
    """ A DictBackend that records the requests it receives. """

    def __init__(self):
        super(RecordingBackend, self).__init__()
        self.requests = []

    def get(self, key):
        self.requests.append(('get', key))
        return super(RecordingBackend, self).get(key)

    def transaction(self):
        self.requests.append(('transaction', None))
        return super(RecordingBackend, self).transaction()

    def delete(self, key):
        self.requests.append(('delete', key))
        return super(RecordingBackend, self).delete(key)

    def close(self):
        self.requests.append(('close', None))
        return super(RecordingBackend, self).close()


class HangingBackend(KeyValueBackend):
    """ A backend whose requests never finish unless they are cancelled. """

    def __init__(self):
        super(HangingBackend, self).__init__()
        self.pending = []
        self.cancelled = []

    def _hang(self, key):
        result = Deferred(lambda _: self.cancelled.append(key))
        self.pending.append(result)
        return result

    def get(self, key):
        return self._hang(key)

    def transaction(self):
        return HangingTransaction(self)

    def delete(self, key):
        return self._hang(key)

    def close(self):
        return succeed(None)


class HangingTransaction(Transaction):
    """ The transaction of a HangingBackend. """

    def __init__(self, backend):
        self._backend = backend
        self._keys = []

    def set(self, key, value, ttl=0):
        self._keys.append(key)

    def execute(self):
        return self._backend._hang(' '.join(self._keys))  # pylint: disable=protected-access


class FailingBackend(DictBackend):
    """ A backend whose requests fail with the given error. """

    def __init__(self, error):
        super(FailingBackend, self).__init__()
        self.error = error

    def get(self, key):
        raise self.error

    def delete(self, key):
        raise self.error


class FakeRedisClient(object):
    """
    A stand in for a redis-py client that keeps its values in a dict.
    If error is set, every command raises it.
    """

    def __init__(self):
        self.values = {}
        self.expirations = {}
        self.executedPipelines = []
        self.closed = False
        self.error = None

    def _checkError(self):
        if self.error is not None:
            raise self.error

    def get(self, key):
        self._checkError()
        return self.values.get(key)

    def delete(self, *keys):
        self._checkError()
        deleted = 0
        for key in keys:
            if self.values.pop(key, None) is not None:
                deleted += 1
        return deleted

    def pipeline(self, transaction=True):
        return FakeRedisPipeline(self, transaction)

    def close(self):
        self.closed = True


class BlockingRedisClient(FakeRedisClient):
    """ A FakeRedisClient whose get blocks the calling thread until released. """

    def __init__(self):
        super(BlockingRedisClient, self).__init__()
        self.released = threading.Event()
        self.finished = threading.Event()

    def get(self, key):
        try:
            self.released.wait(10)
            return super(BlockingRedisClient, self).get(key)
        finally:
            self.finished.set()


class FakeRedisPipeline(object):
    """ The pipeline of a FakeRedisClient. """

    def __init__(self, client, transaction):
        self._client = client
        self.transaction = transaction
        self.commands = []

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.commands = []

    def set(self, key, value, ex=None):
        self.commands.append((key, value, ex))

    def execute(self):
        self._client._checkError()  # pylint: disable=protected-access
        self._client.executedPipelines.append((self.transaction, list(self.commands)))
        for key, value, ex in self.commands:
            self._client.values[key] = value
            self._client.expirations[key] = ex
        return [True] * len(self.commands)


def getTestClient(clientId=None, grantType=GrantTypes.AUTHORIZATION_CODE):
    """
    :param clientId: The client id or None for a random client id.
    :param grantType: The grant type of the client.
    :return: A dummy client that can be used in the tests.
    """
    if clientId is None:
        clientId = str(uuid4())
    return Client(clientId, secret='ClientSecret', domain='https://return.nonexistent',
                  public=False, userId='testUser', grantType=grantType)


def getTestPasswordClient(clientId=None):
    """
    :param clientId: The client id or None for a random client id.
    :return: A dummy password client that can be used in the tests.
    """
    if clientId is None:
        clientId = str(uuid4())
    return PasswordClient(clientId, secret='ClientSecret', domain='https://return.nonexistent',
                          public=True, userId='testUser', password='AccountPassword',
                          account='testAccount')


def getTestPermissions(*names):
    """
    :param names: The names of the permissions.
    :return: A list of dummy permissions with the given names.
    """
    return [ClientPermission(name=name, scope=[name.upper(), 'READ']) for name in names]


def assertClientEquals(testCase, client, expectedClient, message):
    """
    Assert that the client equals the expected client.
    :param testCase: The current test case.
    :param client: The client to compare.
    :param expectedClient: The client to compare the first client against.
    :param message: The assertion message.
    """
    if message.endswith('.'):
        message = message[:-1]
    testCase.assertIsInstance(client, expectedClient.__class__,
                              message + ': Expected a client of the same class')
    for name, value in expectedClient.__dict__.items():
        testCase.assertTrue(hasattr(client, name),
                            msg=message + ': Missing attribute "{name}"'.format(name=name))
        testCase.assertEqual(
            value, getattr(client, name),
            msg=message + ': Attribute "{name}" differs from expected value'.format(name=name))
