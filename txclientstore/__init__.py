# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Stores OAuth2 clients and their permissions in a key value storage with twisted. """

from .granttypes import GrantTypes
from .store import ClientStore

__all__ = ['ClientStore', 'GrantTypes', 'backend', 'clients', 'codec', 'config', 'errors', 'imp',
           'store']
