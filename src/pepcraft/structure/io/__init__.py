# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for reading and writing residues from/to files.

Currently only the PDB format is supported, see
:mod:`pepcraft.structure.io.pdb`.
"""

__name__ = "pepcraft.structure.io"
__author__ = "The Pepcraft contributors"
