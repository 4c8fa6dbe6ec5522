# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for building protein structures from residues.

A :class:`Residue` represents a single amino acid by one position in
space (the *C-alpha* atom), an orientation and an optional bond to
another residue.
The bond is stored as the ID of the partner residue
(:attr:`Residue.connected_to`), not as object reference.

A :class:`ResidueGraph` is the single owner of the residues of a
structure.
It is modified by a small set of total operations
(:func:`ResidueGraph.add()`, :func:`ResidueGraph.update()`,
:func:`ResidueGraph.remove()`, :func:`ResidueGraph.connect()`, ...)
and counts its modifications in :attr:`ResidueGraph.generation`.

:func:`snap()` places a residue that was dropped at some position onto
the canonical bond distance (:attr:`BOND_DISTANCE`) of its nearest
neighbor and bonds both residues.

For reading and writing structure files have a look at the
:mod:`pepcraft.structure.io` subpackage.
Information about the amino acids themselves is available in
:mod:`pepcraft.structure.info`.
"""

__name__ = "pepcraft.structure"
__author__ = "The Pepcraft contributors"

from .error import *
from .residue import *
from .graph import *
from .geometry import *
from .snap import *
