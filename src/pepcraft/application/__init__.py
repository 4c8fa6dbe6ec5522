# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for running remote jobs, i.e. searches on web servers.

Each job is represented by an :class:`Application`, which runs through
a defined life cycle:
It is created, started with :func:`Application.start()` and its
results are obtained after :func:`Application.join()`.
While the job is running, other code may be executed.
A running job can be cancelled at any time with
:func:`Application.cancel()` or via its :class:`CancellationToken`.
"""

__name__ = "pepcraft.application"
__author__ = "The Pepcraft contributors"

from .application import *
from .webapp import *
