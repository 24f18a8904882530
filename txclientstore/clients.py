# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Classes for representing and storing oauth2 clients and their permissions. """

from abc import abstractmethod, ABCMeta

from txclientstore.util import isAnyStr
from txclientstore.granttypes import GrantTypes


class ClientStorage(metaclass=ABCMeta):
    """
    This class's purpose is to manage and give access to the clients that the
    authorization server knows via their clientId, together with the permissions
    that were granted to each client.

    Every method returns a Deferred. A client or permission list that does not exist
    is reported as None, never as an error.
    """

    @abstractmethod
    def createClient(self, client, timeout=None):
        """
        Store a new client. A client with an empty id is not stored.
        :param client: The client to store.
        :param timeout: Seconds after which the request is cancelled, or None.
        :return: A Deferred that fires with None once the client is stored.
        """
        raise NotImplementedError()

    @abstractmethod
    def getByID(self, clientId, timeout=None):
        """
        :param clientId: The id of the client.
        :param timeout: Seconds after which the request is cancelled, or None.
        :return: A Deferred that fires with the client object or None if no such client exists.
        """
        raise NotImplementedError()

    @abstractmethod
    def removeClientInfoById(self, clientId, timeout=None):
        """
        Remove a client. Removing a client that does not exist succeeds.
        :param clientId: The id of the client.
        :param timeout: Seconds after which the request is cancelled, or None.
        :return: A Deferred that fires with None once the client is removed.
        """
        raise NotImplementedError()

    @abstractmethod
    def createClientPermission(self, clientId, permissions, timeout=None):
        """
        Store the permissions of a client, replacing any previously stored permissions.
        :param clientId: The id of the client.
        :param permissions: A list of ClientPermission objects.
        :param timeout: Seconds after which the request is cancelled, or None.
        :return: A Deferred that fires with None once the permissions are stored.
        """
        raise NotImplementedError()

    @abstractmethod
    def getPermissionByID(self, clientId, timeout=None):
        """
        :param clientId: The id of the client.
        :param timeout: Seconds after which the request is cancelled, or None.
        :return: A Deferred that fires with the list of ClientPermission objects
                 of the client, or None if no permissions were stored for it.
        """
        raise NotImplementedError()

    @abstractmethod
    def close(self):
        """
        Release the underlying storage.
        :return: A Deferred that fires once the storage is released.
        """
        raise NotImplementedError()


class Client(object):
    """
    This class represents a registered client.

    The grant type of a client is its discriminator: it is stored together with
    the client and decides which client class a stored client is loaded as.
    """

    def __init__(self, clientId, secret='', domain='', public=False, userId='', grantType=''):
        """
        :raises ValueError: If one of the argument is not of the expected type.
        :param clientId: The id of this client.
        :param secret: The client secret.
        :param domain: The redirect domain of the client.
        :param public: Whether this is a public client.
        :param userId: The id of the user that owns this client.
        :param grantType: The grant type of this client, as a GrantTypes member or a string.
        """
        super(Client, self).__init__()
        if isinstance(grantType, GrantTypes):
            grantType = grantType.value
        for name, value in [('clientId', clientId), ('secret', secret), ('domain', domain),
                            ('userId', userId), ('grantType', grantType)]:
            if not isAnyStr(value):
                raise ValueError('Expected {name} to be a string, got {type}'
                                 .format(name=name, type=type(value)))
        if not isinstance(public, bool):
            raise ValueError('Expected public to be a bool, got ' + str(type(public)))
        self.id = clientId  # pylint: disable=invalid-name
        self.secret = secret
        self.domain = domain
        self.public = public
        self.userId = userId
        self.grantType = grantType

    def __eq__(self, other):
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((type(self), self.id))

    def __repr__(self):
        return '{cls}({id!r}, grantType={grantType!r})'.format(
            cls=type(self).__name__, id=self.id, grantType=self.grantType)


class PasswordClient(Client):
    """
    A client that uses the resource owner password credentials grant.
    See: https://tools.ietf.org/html/rfc6749#section-4.3
    In addition to the fields of a client, it carries the account and password it uses.
    """
    def __init__(self, clientId, secret='', domain='', public=False, userId='',
                 password='', account=''):
        super(PasswordClient, self).__init__(
            clientId, secret, domain, public, userId, GrantTypes.PASSWORD)
        if not isAnyStr(password):
            raise ValueError('Expected password to be a string, got ' + str(type(password)))
        if not isAnyStr(account):
            raise ValueError('Expected account to be a string, got ' + str(type(account)))
        self.password = password
        self.account = account


class ClientPermission(object):
    """
    One permission that was granted to a client.
    The store does not interpret permissions, the fields are kept as they were given.
    """

    def __init__(self, fields=None, **kwargs):
        """
        :raises ValueError: If fields is not a dict or has non string keys.
        :param fields: A dict with the json compatible fields of the permission.
        :param kwargs: Additional fields of the permission.
        """
        super(ClientPermission, self).__init__()
        if fields is None:
            fields = {}
        if not isinstance(fields, dict):
            raise ValueError('Expected fields to be a dict, got ' + str(type(fields)))
        fields = dict(fields, **kwargs)
        for name in fields:
            if not isAnyStr(name):
                raise ValueError('Expected the field names to be strings, got '
                                 + str(type(name)))
        self.fields = fields

    def __getitem__(self, name):
        return self.fields[name]

    def get(self, name, default=None):
        """
        :param name: The name of the field.
        :param default: The value to return if the permission has no such field.
        :return: The value of the field.
        """
        return self.fields.get(name, default)

    def __eq__(self, other):
        return isinstance(other, ClientPermission) and self.fields == other.fields

    def __ne__(self, other):
        return not self == other

    __hash__ = None

    def __repr__(self):
        return 'ClientPermission({fields!r})'.format(fields=self.fields)
