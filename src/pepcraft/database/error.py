# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.database"
__author__ = "The Pepcraft contributors"
__all__ = ["RequestError", "TransportError", "RemoteError", "EmptyResultError"]


class RequestError(Exception):
    """
    Base class for all errors that occur while communicating with an
    online database or web service.

    All of these errors are transient from the perspective of the
    caller: the failed operation can be retried by calling it again.
    """

    pass


class TransportError(RequestError):
    """
    Indicates that the server could not be reached or responded with an
    unsuccessful HTTP status code.

    Parameters
    ----------
    message : str
        The error message.
    status_code : int, optional
        The HTTP status code of the response, if any was received.
    """

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class RemoteError(RequestError):
    """
    Indicates that the server reported an error for the request or
    returned a response with malformed content.
    """

    pass


class EmptyResultError(RequestError):
    """
    Indicates that a search finished successfully, but did not find
    any matches.
    """

    pass
