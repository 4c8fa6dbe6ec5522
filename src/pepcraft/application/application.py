# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.application"
__author__ = "The Pepcraft contributors"
__all__ = [
    "Application",
    "AppState",
    "requires_state",
    "CancellationToken",
    "AppStateError",
    "TimeoutError",
    "CancelledError",
]

import abc
import threading
import time
from enum import Flag, auto
from functools import wraps


class AppState(Flag):
    """
    This enum type represents the app states of an application.
    """

    CREATED = auto()
    RUNNING = auto()
    FINISHED = auto()
    JOINED = auto()
    CANCELLED = auto()


def requires_state(app_state):
    """
    A decorator for methods of :class:`Application` subclasses that
    raises an :class:`AppStateError` in case the method is called, when
    the :class:`Application` is not in the specified :class:`AppState`
    `app_state`.

    Parameters
    ----------
    app_state : AppState
        The required app state.

    Examples
    --------
    Raises :class:`AppStateError` when `function` is called,
    if :class:`Application` is not in one of the specified states:

    >>> @requires_state(AppState.RUNNING | AppState.FINISHED)
    ... def function(self):
    ...     pass
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            # First parameter of method is always 'self'
            instance = args[0]
            if not instance._state & app_state:
                raise AppStateError(
                    f"The application is in {instance._state} state, "
                    f"but {app_state} state is required"
                )
            return func(*args, **kwargs)

        return wrapper

    return decorator


class CancellationToken:
    """
    A flag that signals an :class:`Application` to stop waiting for
    its results.

    The token is observed by the application at each point where it
    waits for the server, i.e. before and after each server contact
    and during each wait interval.
    Cancelling the token interrupts a pending wait interval
    immediately.
    The token can be cancelled from any thread, e.g. from the thread of
    a user interface that is closed while a search is running.

    Examples
    --------

    >>> token = CancellationToken()
    >>> print(token.is_cancelled())
    False
    >>> token.cancel()
    >>> print(token.is_cancelled())
    True
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        """
        Cancel the token.
        Cancelling an already cancelled token has no effect.
        """
        self._event.set()

    def is_cancelled(self):
        """
        Check whether the token was cancelled.

        Returns
        -------
        cancelled : bool
            True, if :func:`cancel()` was called.
        """
        return self._event.is_set()

    def wait(self, seconds):
        """
        Wait for the given time or until the token is cancelled,
        whatever happens first.

        Parameters
        ----------
        seconds : float
            The maximum time to wait.

        Returns
        -------
        cancelled : bool
            True, if the token was cancelled.
        """
        return self._event.wait(seconds)

    def raise_if_cancelled(self):
        """
        Raise a :class:`CancelledError` if the token was cancelled.
        """
        if self.is_cancelled():
            raise CancelledError("The application was cancelled")


class Application(metaclass=abc.ABCMeta):
    """
    This class is a wrapper around a remote job, e.g. a search on a
    web server.
    Subclasses of this abstract base class specify the respective
    kind of job and the way of interacting with it.

    Every :class:`Application` runs through different app states
    (instances of enum :class:`AppState`) from its creation until its
    termination:
    Directly after its instantiation the app is in the *CREATED* state.
    After the user calls the :func:`start()` method, the app state is
    set to *RUNNING* and the :class:`Application` type specific
    :func:`run()` method is called, which submits the job.
    When the job finishes the app state changes to *FINISHED*.
    This is checked via the :class:`Application` type specific
    :func:`is_finished()` method.
    The user can now call the :func:`join()` method, concluding the
    application in the *JOINED* state and making the results of the
    application accessible by executing the :class:`Application`
    type specific :func:`evaluate()` method.
    Furthermore this executes the :class:`Application` type specific
    :func:`clean_up()` method.
    :func:`join()` can even be called in the *RUNNING* state:
    This will check :func:`is_finished()` in intervals of
    :func:`wait_interval()` and will directly go into the *JOINED*
    state as soon as the application reaches the *FINISHED* state.
    The number of checks and the total time can be limited.
    Calling the :func:`cancel()` method while the application is
    *RUNNING* or *FINISHED*, or cancelling its
    :class:`CancellationToken`, leaves the application in the
    *CANCELLED* state.
    This triggers the :func:`clean_up()` method, too, but there are no
    accessible results.
    If a method is called in an unsuitable app state, an
    :class:`AppStateError` is called.

    The application run behaves like an additional thread: Between the
    call of :func:`start()` and :func:`join()` other Python code can be
    executed, while the job runs on the server.

    Parameters
    ----------
    cancel_token : CancellationToken, optional
        The token that is observed while waiting for the job.
        By default, the application creates its own token, which is
        cancelled by :func:`cancel()`.
    """

    def __init__(self, cancel_token=None):
        self._state = AppState.CREATED
        self._cancel_token = (
            CancellationToken() if cancel_token is None else cancel_token
        )

    @property
    def cancel_token(self):
        return self._cancel_token

    @requires_state(AppState.CREATED)
    def start(self):
        """
        Start the application run and set its state to *RUNNING*.
        This can only be done from the *CREATED* state.

        Raises
        ------
        CancelledError
            If the cancellation token was cancelled before or during
            the submission of the job.
        """
        self._cancel_token.raise_if_cancelled()
        try:
            self.run()
        except Exception:
            self._state = AppState.CANCELLED
            raise
        self._start_time = time.time()
        self._state = AppState.RUNNING
        if self._cancel_token.is_cancelled():
            self._abort()
            self._cancel_token.raise_if_cancelled()

    @requires_state(AppState.RUNNING | AppState.FINISHED)
    def join(self, timeout=None, max_polls=None):
        """
        Conclude the application run and set its state to *JOINED*.
        This can only be done from the *RUNNING* or *FINISHED* state.

        If the application is *FINISHED* the joining process happens
        immediately, if otherwise the application is *RUNNING*, this
        method waits until the application is *FINISHED*.

        Parameters
        ----------
        timeout : float, optional
            If this parameter is specified, the :class:`Application`
            only waits for finishing until this value (in seconds) runs
            out.
            After this time is exceeded a :class:`TimeoutError` is
            raised and the application is cancelled.
        max_polls : int, optional
            If this parameter is specified, the :class:`Application`
            checks at most this number of times, whether the job has
            finished.
            If the job is still not finished, a :class:`TimeoutError`
            is raised and the application is cancelled.

        Raises
        ------
        TimeoutError
            If the joining process exceeds the `timeout` value or the
            `max_polls` value.
        CancelledError
            If the application was cancelled while waiting.
        """
        try:
            if self._state == AppState.RUNNING:
                self._wait()
            polls = 0
            while self.get_app_state() != AppState.FINISHED:
                polls += 1
                self._cancel_token.raise_if_cancelled()
                if max_polls is not None and polls >= max_polls:
                    raise TimeoutError(
                        f"The application is still running after "
                        f"{polls} status checks"
                    )
                if timeout is not None and time.time() - self._start_time > timeout:
                    raise TimeoutError(
                        f"The application expired its timeout ({timeout:.1f} s)"
                    )
                self._wait()
            self._cancel_token.raise_if_cancelled()
            self.evaluate()
        except AppStateError:
            raise
        except Exception:
            self._abort()
            raise
        self._state = AppState.JOINED
        self.clean_up()

    @requires_state(AppState.RUNNING | AppState.FINISHED)
    def cancel(self):
        """
        Cancel the application when in *RUNNING* or *FINISHED* state.

        This also cancels the :class:`CancellationToken` of the
        application, so that a :func:`join()` waiting in another thread
        returns immediately with a :class:`CancelledError`.
        """
        self._cancel_token.cancel()
        self._abort()

    def get_app_state(self):
        """
        Get the current app state.

        In the *RUNNING* state this involves a call of
        :func:`is_finished()`, which may contact the server.

        Returns
        -------
        app_state : AppState
            The current app state.
        """
        if self._state == AppState.RUNNING:
            if self.is_finished():
                self._state = AppState.FINISHED
        return self._state

    def _wait(self):
        if self._cancel_token.wait(self.wait_interval()):
            raise CancelledError("The application was cancelled")

    def _abort(self):
        if self._state & (AppState.RUNNING | AppState.FINISHED):
            self._state = AppState.CANCELLED
            self.clean_up()

    @abc.abstractmethod
    def run(self):
        """
        Commence the application run. Called in :func:`start()`.

        PROTECTED: Override when inheriting.
        """
        pass

    @abc.abstractmethod
    def is_finished(self):
        """
        Check if the application has finished.

        PROTECTED: Override when inheriting.

        Returns
        -------
        finished : bool
            True of the application has finished, false otherwise
        """
        pass

    @abc.abstractmethod
    def wait_interval(self):
        """
        The time interval of :func:`is_finished()` calls in the joining
        process.

        PROTECTED: Override when inheriting.

        Returns
        -------
        interval : float
            Time (in seconds) between calls of :func:`is_finished()` in
            :func:`join()`
        """
        pass

    @abc.abstractmethod
    def evaluate(self):
        """
        Evaluate application results. Called in :func:`join()`.

        PROTECTED: Override when inheriting.
        """
        pass

    def clean_up(self):
        """
        Do clean up work after the application terminates.

        PROTECTED: Optionally override when inheriting.
        """
        pass


class AppStateError(Exception):
    """
    Indicate that the application lifecycle was violated.
    """

    pass


class TimeoutError(Exception):
    """
    Indicate that the application's timeout or maximum number of status
    checks expired.
    """

    pass


class CancelledError(Exception):
    """
    Indicate that the application was cancelled while waiting for its
    results.
    """

    pass
