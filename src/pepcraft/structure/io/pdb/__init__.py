# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for reading and writing residues using the
PDB format.

Each residue is represented by a single *C-alpha* atom record.
The format is the interchange format with remote services, e.g. for
structure search and for fetching structures from the RCSB PDB.
Bonds between residues are not part of the interchange format.
"""

__name__ = "pepcraft.structure.io.pdb"
__author__ = "The Pepcraft contributors"

from .file import *
from .convert import *
