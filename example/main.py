# Copyright (c) Sebastian Scholz
# See LICENSE for details.
"""
This is an example of how to store clients and their permissions with this library and twisted.
It registers a few clients in a Redis server, reads them back and removes one of them again.
The Redis server is configured in the example.ini file next to this script.
"""

import logging
import os
import sys

from twisted.internet import task
from twisted.internet.defer import inlineCallbacks, returnValue

from txclientstore import GrantTypes
from txclientstore.clients import Client, PasswordClient, ClientPermission
from txclientstore.config import createClientStore


def getExampleClients():
    """
    :return: The clients to use for this example.
    """
    return [
        Client('clock', secret='clock_secret', domain='https://clientServer.com/return',
               grantType=GrantTypes.AUTHORIZATION_CODE),
        PasswordClient('clockApp', secret='app_secret', domain='https://clientServer.com',
                       userId='alice', password='alice_password', account='alice'),
    ]


def getExamplePermissions():
    """
    :return: The permissions of the clock client.
    """
    return [
        ClientPermission(resource='clock', actions=['VIEW_CLOCK']),
        ClientPermission(resource='alarm', actions=['VIEW_ALARM', 'SET_ALARM']),
    ]


@inlineCallbacks
def runExample(clientStore, output=print):
    """
    Store, read and remove the example clients.
    :param clientStore: The client store to use.
    :param output: A function that is called with every line of output.
    :return: A Deferred that fires with the ids of the clients that were read back.
    """
    clients = getExampleClients()
    for client in clients:
        yield clientStore.createClient(client)
    yield clientStore.createClientPermission('clock', getExamplePermissions())
    foundClientIds = []
    for client in clients:
        storedClient = yield clientStore.getByID(client.id)
        if storedClient is None:
            output('Client {id} was not found'.format(id=client.id))
            continue
        foundClientIds.append(storedClient.id)
        output('Found {cls} {id} with grant type {grantType}'.format(
            cls=type(storedClient).__name__, id=storedClient.id,
            grantType=storedClient.grantType))
    permissions = yield clientStore.getPermissionByID('clock')
    for permission in permissions or []:
        output('clock may use {resource}: {actions}'.format(
            resource=permission['resource'], actions=', '.join(permission['actions'])))
    yield clientStore.removeClientInfoById('clockApp')
    removedClient = yield clientStore.getByID('clockApp')
    output('clockApp after removal: {client}'.format(client=removedClient))
    returnValue(foundClientIds)


@inlineCallbacks
def main(reactor, configPath=None):
    """
    Run the example against the Redis server configured in the config file.
    :param reactor: The reactor.
    :param configPath: Path to the config file, defaults to example.ini next to this script.
    """
    if configPath is None:
        configPath = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'example.ini')
    clientStore = createClientStore(configPath, clock=reactor)
    try:
        yield runExample(clientStore)
    finally:
        yield clientStore.close()


if __name__ == '__main__':
    logging.basicConfig(level=logging.DEBUG)
    task.react(main, sys.argv[1:])
