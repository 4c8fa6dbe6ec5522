# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for downloading structures from the RCSB PDB.
"""

__name__ = "pepcraft.database.rcsb"
__author__ = "The Pepcraft contributors"

from .download import *
from .load import *
