# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.application"
__author__ = "The Pepcraft contributors"
__all__ = ["WebApp"]

import abc
import time
from pepcraft.application.application import Application, CancelledError


class WebApp(Application, metaclass=abc.ABCMeta):
    """
    The base class for all applications that run a job on a web server.

    Subclasses report each request to the server via :func:`contact()`.
    To respect the usage rules of the server, two requests of the same
    application are at least :attr:`contact_delay` seconds apart:
    If necessary, :func:`contact()` waits for the remaining time.
    The wait is interrupted, when the :class:`CancellationToken` of the
    application is cancelled.

    Parameters
    ----------
    app_url : str
        The base URL of the web service.
        A trailing slash is removed.
    obey_rules : bool, optional
        If false, the server is contacted without any delay.
    cancel_token : CancellationToken, optional
        The token that is observed while waiting for the server.

    Attributes
    ----------
    contact_delay : float
        The minimum time (in seconds) between two server contacts.
        Subclasses set this as class attribute.
    """

    contact_delay = 0

    def __init__(self, app_url, obey_rules=True, cancel_token=None):
        super().__init__(cancel_token)
        self._obey_rules = obey_rules
        self._app_url = app_url.rstrip("/")
        self._last_contact = None

    def app_url(self):
        """
        Get the base URL of the web service.

        Returns
        -------
        url : str
            URL of the web service.
        """
        return self._app_url

    def contact(self):
        """
        Register a contact to the server, after waiting until at least
        :attr:`contact_delay` seconds passed since the previous contact.

        PROTECTED: Call directly before each server request.

        Raises
        ------
        CancelledError
            If the cancellation token is cancelled while waiting.
        """
        if self._obey_rules and self._last_contact is not None:
            remaining = self.contact_delay - (time.monotonic() - self._last_contact)
            if remaining > 0 and self._cancel_token.wait(remaining):
                raise CancelledError("The application was cancelled")
        self._last_contact = time.monotonic()
