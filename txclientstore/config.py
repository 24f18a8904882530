# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Loading the configuration of a client store from a config file. """

import os

from configparser import RawConfigParser

from txclientstore.imp import RedisBackend
from txclientstore.store import ClientStore


class ClientStoreConfig(object):
    """
    The configuration of a client store that is backed by Redis.

    Example config file:

        [client_store]
        namespace = oauth2:
        host = localhost
        port = 6379
        db = 0

    Instead of host and port, a url can be given. If cluster_nodes is set to a space separated
    list of host:port pairs, the store connects to a Redis cluster.
    """
    SECTION = 'client_store'
    namespace = ''
    url = None
    host = 'localhost'
    port = 6379
    db = 0
    password = None
    clusterNodes = None
    socketTimeout = None

    def __init__(self, namespace='', url=None, host='localhost', port=6379, db=0,
                 password=None, clusterNodes=None, socketTimeout=None):
        super(ClientStoreConfig, self).__init__()
        self.namespace = namespace
        self.url = url
        self.host = host
        self.port = port
        self.db = db  # pylint: disable=invalid-name
        self.password = password
        self.clusterNodes = clusterNodes
        self.socketTimeout = socketTimeout

    @classmethod
    def fromFile(cls, path, section=SECTION):
        """
        Load the configuration from a config file.
        A missing file or section results in the default configuration.

        :raises ValueError: If an option has an invalid value.
        :param path: Path to the config file.
        :param section: The section of the config file that contains the options.
        :return: The configuration.
        """
        configParser = RawConfigParser()
        configParser.read(os.path.abspath(path))
        if not configParser.has_section(section):
            return cls()

        def getOption(name, default=None, getter=configParser.get):
            if not configParser.has_option(section, name):
                return default
            return getter(section, name)

        clusterNodes = getOption('cluster_nodes')
        if clusterNodes is not None:
            clusterNodes = [cls._parseNode(node) for node in clusterNodes.split()]
        return cls(
            namespace=getOption('namespace', ''),
            url=getOption('url'),
            host=getOption('host', 'localhost'),
            port=getOption('port', 6379, configParser.getint),
            db=getOption('db', 0, configParser.getint),
            password=getOption('password'),
            clusterNodes=clusterNodes or None,
            socketTimeout=getOption('socket_timeout', None, configParser.getfloat),
        )

    def getRedisOptions(self):
        """
        :return: The keyword arguments for the redis client of a single server.
        """
        options = {'host': self.host, 'port': self.port, 'db': self.db}
        if self.password is not None:
            options['password'] = self.password
        if self.socketTimeout is not None:
            options['socket_timeout'] = self.socketTimeout
        return options

    def getClusterOptions(self):
        """
        :return: The keyword arguments for the redis client of a cluster.
        """
        from redis.cluster import ClusterNode
        options = {'startup_nodes': [ClusterNode(host, port) for host, port in self.clusterNodes]}
        if self.password is not None:
            options['password'] = self.password
        if self.socketTimeout is not None:
            options['socket_timeout'] = self.socketTimeout
        return options

    def createBackend(self, **kwargs):
        """
        :param kwargs: Additional arguments for the backend.
        :return: A RedisBackend as described by this configuration.
        """
        if self.clusterNodes:
            return RedisBackend.fromClusterOptions(self.getClusterOptions(), **kwargs)
        if self.url is not None:
            return RedisBackend.fromUrl(self.url, **kwargs)
        return RedisBackend.fromOptions(self.getRedisOptions(), **kwargs)

    @staticmethod
    def _parseNode(node):
        host, separator, port = node.rpartition(':')
        if separator == '' or host == '':
            raise ValueError('Expected a cluster node as host:port, got ' + node)
        try:
            return host, int(port)
        except ValueError:
            raise ValueError('Invalid port in cluster node ' + node)


def createClientStore(config, clock=None, **kwargs):
    """
    Create a client store as described by the configuration.

    :param config: A ClientStoreConfig or the path to a config file.
    :param clock: The IReactorTime used for timeouts, defaults to the global reactor.
    :param kwargs: Additional arguments for the RedisBackend.
    :return: The new ClientStore.
    """
    if not isinstance(config, ClientStoreConfig):
        config = ClientStoreConfig.fromFile(config)
    return ClientStore(config.createBackend(**kwargs), keyNamespace=config.namespace,
                       clock=clock)
