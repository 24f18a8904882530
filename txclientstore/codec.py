# Copyright (c) Sebastian Scholz
# See LICENSE for details.
"""
Conversion between clients and permissions and the json payloads
they are stored as.
"""

import json

from txclientstore.util import isAnyStr, ensureByteString
from txclientstore.errors import EncodingError
from txclientstore.granttypes import GrantTypes
from txclientstore.clients import Client, PasswordClient, ClientPermission

# Wire name, attribute name and zero value of the stored client fields.
_CLIENT_FIELDS = [
    ('ID', 'id', ''),
    ('Secret', 'secret', ''),
    ('Domain', 'domain', ''),
    ('Public', 'public', False),
    ('UserID', 'userId', ''),
    ('GrantType', 'grantType', ''),
]
_PASSWORD_FIELDS = [
    ('Password', 'password', ''),
    ('Account', 'account', ''),
]


def encodeClient(client):
    """
    Encode a client into its stored form. All client classes are stored in the same shape,
    the password fields are empty for clients that are not password clients.

    :raises EncodingError: If the client can not be encoded.
    :param client: The client to encode.
    :return: The encoded client as utf-8 bytes.
    """
    if not isinstance(client, Client):
        raise EncodingError('Expected a Client, got ' + str(type(client)))
    data = {wireName: getattr(client, name) for wireName, name, _ in _CLIENT_FIELDS}
    for wireName, name, zeroValue in _PASSWORD_FIELDS:
        data[wireName] = getattr(client, name, zeroValue)
    return _dumps(data)


def decodeClient(payload):
    """
    Decode a stored client. The stored grant type decides the class of the result:
    A password grant type results in a PasswordClient, everything else in a Client.

    :raises EncodingError: If the payload is not a valid stored client.
    :param payload: The stored client as utf-8 bytes.
    :return: The decoded client.
    """
    data = _loads(payload)
    if not isinstance(data, dict):
        raise EncodingError('Expected a stored client to be a json object, got '
                            + type(data).__name__)
    kwargs = _readFields(data, _CLIENT_FIELDS)
    kwargs['clientId'] = kwargs.pop('id')
    grantType = kwargs.pop('grantType')
    try:
        if grantType == GrantTypes.PASSWORD.value:
            kwargs.update(_readFields(data, _PASSWORD_FIELDS))
            return PasswordClient(**kwargs)
        return Client(grantType=grantType, **kwargs)
    except ValueError as error:
        raise EncodingError('Invalid stored client: {msg}'.format(msg=error), originalError=error)


def encodePermissions(permissions):
    """
    :raises EncodingError: If the permissions can not be encoded.
    :param permissions: A list of ClientPermission objects or None for no permissions.
    :return: The permission list encoded as utf-8 bytes.
    """
    if permissions is None:
        permissions = []
    data = []
    for permission in permissions:
        if not isinstance(permission, ClientPermission):
            raise EncodingError('Expected a ClientPermission, got ' + str(type(permission)))
        data.append(permission.fields)
    return _dumps(data)


def decodePermissions(payload):
    """
    :raises EncodingError: If the payload is not a valid stored permission list.
    :param payload: The stored permission list as utf-8 bytes.
    :return: The list of ClientPermission objects in the order they were stored.
    """
    data = _loads(payload)
    if data is None:
        return []
    if not isinstance(data, list):
        raise EncodingError('Expected a stored permission list to be a json array, got '
                            + type(data).__name__)
    permissions = []
    for fields in data:
        if not isinstance(fields, dict):
            raise EncodingError('Expected a stored permission to be a json object, got '
                                + type(fields).__name__)
        permissions.append(ClientPermission(fields))
    return permissions


def _readFields(data, fields):
    """
    Read the given fields from the decoded json object. Field names are matched
    case insensitive, an exact match wins over the last case insensitive match.
    Missing and null fields get their zero value.

    :raises EncodingError: If a field has the wrong type.
    :param data: The decoded json object.
    :param fields: The fields to read.
    :return: A mapping of attribute names to values.
    """
    lowerCaseData = {}
    for key, value in data.items():
        lowerCaseData[key.lower()] = value
    result = {}
    for wireName, name, zeroValue in fields:
        value = data[wireName] if wireName in data else lowerCaseData.get(wireName.lower())
        if value is None:
            value = zeroValue
        elif type(value) is not type(zeroValue):  # pylint: disable=unidiomatic-typecheck
            raise EncodingError(
                'Expected the stored field {name} to be of type {expected}, got {type}'.format(
                    name=wireName, expected=type(zeroValue).__name__, type=type(value).__name__))
        result[name] = value
    return result


def _dumps(data):
    try:
        return json.dumps(data, ensure_ascii=False, allow_nan=False,
                          separators=(',', ':')).encode('utf-8')
    except (TypeError, ValueError) as error:
        raise EncodingError('Unable to encode {type}: {msg}'.format(
            type=type(data).__name__, msg=error), originalError=error)


def _loads(payload):
    if isAnyStr(payload):
        payload = ensureByteString(payload)
    if not isinstance(payload, bytes):
        raise EncodingError('Expected the stored payload to be bytes, got ' + str(type(payload)))
    try:
        return json.loads(payload.decode('utf-8'))
    except (UnicodeDecodeError, ValueError) as error:
        raise EncodingError('Stored payload is not valid json: {msg}'.format(msg=error),
                            originalError=error)
