# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This is the top-level package of *Pepcraft*.
Although it does not provide useful functionality for most users,
it does provide the base classes used by the file handling and the
residue containers in its subpackages.

*Pepcraft* is organized into three subpackages:
:mod:`pepcraft.structure` holds the residue graph, the snapping of
residues onto bond distance and the reading and writing of structure
files,
:mod:`pepcraft.database` fetches structures from online databases
and :mod:`pepcraft.application` interfaces remote structure search
services.
"""

__version__ = "0.4.0"
__name__ = "pepcraft"
__author__ = "The Pepcraft contributors"

from .file import *
from .copyable import *
