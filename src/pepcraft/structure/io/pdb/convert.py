# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Convenience functions for the conversion between residues and PDB
formatted text.
"""

__name__ = "pepcraft.structure.io.pdb"
__author__ = "The Pepcraft contributors"
__all__ = [
    "ExportResult",
    "get_residues",
    "set_residues",
    "export_residues",
    "import_residues",
]

from collections import namedtuple
from pepcraft.structure.io.pdb.file import PDBFile


ExportResult = namedtuple("ExportResult", ["text", "is_valid", "warnings"])
ExportResult.__doc__ = """
The outcome of :func:`export_residues()`.

Attributes
----------
text : str
    The PDB formatted text.
is_valid : bool
    False, if the residues are not suitable for the PDB format,
    e.g. because there are no residues or a coordinate is not finite.
warnings : list of str
    A description of each problem.
    Empty if `is_valid` is true.
"""


def get_residues(pdb_file):
    """
    Create residues from a :class:`PDBFile`.

    This function is a thin wrapper around the :class:`PDBFile` method
    :func:`get_residues()` for the sake of consistency with the other
    conversion functions.

    Parameters
    ----------
    pdb_file : PDBFile
        The file object.

    Returns
    -------
    residues : list of Residue
        The residues read from the file.
    """
    return pdb_file.get_residues()


def set_residues(pdb_file, residues):
    """
    Write residues into a :class:`PDBFile`.

    This function is a thin wrapper around the :class:`PDBFile` method
    :func:`set_residues()` for the sake of consistency with the other
    conversion functions.

    Parameters
    ----------
    pdb_file : PDBFile
        The file object.
    residues : iterable of Residue
        The residues to be written.
    """
    pdb_file.set_residues(residues)


def export_residues(residues):
    """
    Write residues as PDB formatted text.

    Each residue is written as one *C-alpha* atom in list order,
    not in bond order.
    Bonds are not part of the output.

    This function does not raise on unsuitable input.
    Instead the returned :class:`ExportResult` is marked as invalid and
    describes the problems, so that the caller can decide whether to
    use the text anyway.

    Parameters
    ----------
    residues : iterable of Residue or ResidueGraph
        The residues to be written.

    Returns
    -------
    result : ExportResult
        The text, its validity and the problems found.

    Examples
    --------

    >>> result = export_residues([Residue("Gly", [1.5, -2.25, 0])])
    >>> print(result.text)
    ATOM      1  CA  GLY A   1       1.500  -2.250   0.000  1.00  0.00           C
    END
    <BLANKLINE>
    >>> result = export_residues([])
    >>> print(result.is_valid)
    False
    >>> print(result.warnings)
    ['The structure contains no residues']
    """
    residues = list(residues)
    problems = PDBFile.check_residues(residues)
    pdb_file = PDBFile()
    pdb_file.set_residues(residues)
    return ExportResult(str(pdb_file) + "\n", len(problems) == 0, problems)


def import_residues(text):
    """
    Read residues from PDB formatted text.

    Every residue gets a new ID and no bond, i.e. bonds never survive
    an export-import round trip.
    Residues with unknown residue names are skipped with an
    :class:`UnknownResidueWarning`.

    Parameters
    ----------
    text : str
        The PDB formatted text.

    Returns
    -------
    residues : list of Residue
        The residues in the order of the records.
        The list may be empty.

    Raises
    ------
    ParseError
        If the coordinates of a record cannot be read.
    """
    return PDBFile.from_text(text).get_residues()
