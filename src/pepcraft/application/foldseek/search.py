# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.application.foldseek"
__author__ = "The Pepcraft contributors"
__all__ = ["search_structure"]

from pepcraft.application.foldseek.webapp import FoldseekWebApp


def search_structure(query, timeout=300, max_polls=300, cancel_token=None, **kwargs):
    """
    Search for structures similar to the query structure and wait for
    the matches.

    This is a shortcut for creating a :class:`FoldseekWebApp`, starting
    and joining it.
    The server is polled until the search completes, fails, the
    `timeout` or `max_polls` is exceeded or `cancel_token` is
    cancelled.

    This function requires an internet connection.

    Parameters
    ----------
    query : ResidueGraph or iterable of Residue
        The query structure.
    timeout : float, optional
        The maximum time (in seconds) to wait for the search.
    max_polls : int, optional
        The maximum number of status checks.
    cancel_token : CancellationToken, optional
        Cancelling this token from another thread aborts the search.
    **kwargs
        Additional parameters for :class:`FoldseekWebApp`.

    Returns
    -------
    matches : list of FoldseekMatch
        The matches in the order reported by the server.

    Raises
    ------
    ValidationError
        If the query is not suitable for a search.
    TransportError
        If the server could not be reached or responded with an error
        status code.
    RemoteError
        If the search failed on the server or the response is
        malformed.
    EmptyResultError
        If the search did not find any match.
    TimeoutError
        If the search did not complete in time.
    CancelledError
        If `cancel_token` was cancelled.
    """
    app = FoldseekWebApp(query, cancel_token=cancel_token, **kwargs)
    app.start()
    app.join(timeout=timeout, max_polls=max_polls)
    return app.get_matches()
