# Copyright (c) Sebastian Scholz
# See LICENSE for details.
""" Utility methods. """


def isAnyStr(val):
    """
    :param val: The value to check
    :return: If it is a string value.
    """
    return isinstance(val, str)


def ensureByteString(string):
    """
    :param string: A string.
    :return: The string as an utf-8 encoded byte string.
    """
    return string if isinstance(string, bytes) else string.encode('utf-8')
