# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This module contains all possible errors of the `structure` subpackage.
"""

__name__ = "pepcraft.structure"
__author__ = "The Pepcraft contributors"
__all__ = [
    "BadStructureError",
    "ValidationError",
    "ParseError",
    "UnknownResidueWarning",
]

from pepcraft.file import InvalidFileError


class BadStructureError(Exception):
    """
    Indicates that a structure is not suitable for a certain operation.
    """

    pass


class ValidationError(BadStructureError):
    """
    Indicates that a structure cannot be submitted, because it has too
    few residues or coordinates that cannot be written into a structure
    file.
    """

    pass


class ParseError(InvalidFileError):
    """
    Indicates that no residues could be obtained from a structure file,
    or that its coordinate records are malformed.
    """

    pass


class UnknownResidueWarning(Warning):
    """
    Indicates that residues with a non-canonical residue name were
    skipped while reading a structure file.
    """

    pass
