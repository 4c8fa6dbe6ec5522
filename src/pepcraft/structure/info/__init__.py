# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for obtaining information about the 20 canonical amino
acids: names, codes, side chain categories and display colors.

The amino acid codes used throughout *Pepcraft* are the three-letter
codes in title case (e.g. ``'Gly'``), as returned by
:func:`normalize_code()`.
Structure files use the upper case form (e.g. ``'GLY'``), as returned by
:func:`pdb_residue_name()`.
"""

__name__ = "pepcraft.structure.info"
__author__ = "The Pepcraft contributors"

from .amino_acids import *
