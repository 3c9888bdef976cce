""" Result codes reported by the session operations. The numeric values are
    stable; applications written against the C client library compare
    against the same numbers.
"""

import enum


class Result(enum.IntEnum):

    SUCCESS                 = 0
    ERROR_PARAMS            = 1
    ERROR_OUT_OF_MEMORY     = 2
    ERROR_SOCK_RECV_CREATE  = 3
    ERROR_SOCK_RECV_SETOPT  = 4
    ERROR_SOCK_RECV_GETOPT  = 5
    ERROR_SOCK_RECV_BIND    = 6
    ERROR_SOCK_RECV_TIMEOUT = 7
    ERROR_SOCK_RECV_READ    = 8
    ERROR_SOCK_RECV_WRP     = 9
    ERROR_SOCK_RECV_SVCNAME = 10
    ERROR_SOCK_RECV_MSGTYPE = 11
    ERROR_SOCK_RECV_CONTENT = 12
    ERROR_SOCK_RECV_PAYLOAD = 13
    ERROR_SOCK_SEND_CREATE  = 14
    ERROR_SOCK_SEND_SETOPT  = 15
    ERROR_SOCK_SEND_GETOPT  = 16
    ERROR_SOCK_SEND_CONNECT = 17
    ERROR_SOCK_SEND_WRP     = 18
    ERROR_SOCK_SEND_WRITE   = 19
    ERROR_SOCK_SEND_PARTIAL = 20
    ERROR_SOCK_SEND_AUTH    = 21
    ERROR_REGISTER          = 22
    ERROR_INTERNAL          = 23
    INVALID                 = 24


# Outcomes a polling caller should expect in steady state. Neither one
# means the session is unhealthy.

expected = frozenset((Result.ERROR_SOCK_RECV_TIMEOUT, Result.ERROR_SOCK_RECV_SVCNAME))


def result_str(result):
    """ Return the name of the provided *result*, which can be a
        :class:`Result` member or a bare integer. Integers that do not
        correspond to a known result are formatted as ``INVALID(n)``.
    """

    # bool and float compare equal to integers, but are not results.
    if isinstance(result, bool) or not isinstance(result, int):
        return 'INVALID(%r)' % (result,)

    try:
        result = Result(result)
    except ValueError:
        return 'INVALID(%d)' % (result)

    return result.name


def is_expected(result):
    """ Return True if *result* is a normal, recoverable outcome of
        :func:`Session.recv`, as opposed to a fault.
    """

    if isinstance(result, bool) or not isinstance(result, int):
        return False

    return result in expected


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
