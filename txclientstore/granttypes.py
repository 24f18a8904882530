# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" The grant types that can be stored as a client discriminator. """

from enum import Enum


class GrantTypes(Enum):
    """
    The different grant types defined by the OAuth2 framework (RFC 6749).
    The stored grant type of a client decides which client class it is decoded into.
    """
    AUTHORIZATION_CODE = 'authorization_code'
    PASSWORD = 'password'
    CLIENT_CREDENTIALS = 'client_credentials'
    REFRESH_TOKEN = 'refresh_token'
    IMPLICIT = '__implicit'
