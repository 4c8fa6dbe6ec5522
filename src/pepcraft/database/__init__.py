# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for fetching data from online databases.

Each subpackage of the database package contains an interface for a
specific database.
The :func:`fetch()` functions download the raw files, while the
:func:`fetch_residues()` and :func:`load_structure()` functions convert
them into residues ready for a :class:`ResidueGraph`.

All network failures are reported as :class:`RequestError` subclasses:
:class:`TransportError` if the server could not be reached or responded
with an unsuccessful status, :class:`RemoteError` if the server reported
an error or responded with malformed content.
"""

__name__ = "pepcraft.database"
__author__ = "The Pepcraft contributors"

from .error import *
