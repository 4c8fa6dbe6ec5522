# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This module provides functions for geometric measurements and
transformations of residues.
"""

__name__ = "pepcraft.structure"
__author__ = "The Pepcraft contributors"
__all__ = ["coord", "distance", "centroid", "translate", "recenter"]

import numpy as np
from pepcraft.structure.residue import Residue


def coord(residues):
    """
    Get the coordinates of residues.

    Parameters
    ----------
    residues : Residue or iterable of Residue or ndarray
        The residues.
        Alternatively, coordinates can be given directly.

    Returns
    -------
    coord : ndarray, shape=(3,) or shape=(n,3), dtype=float
        The coordinates.
    """
    if isinstance(residues, Residue):
        return residues.position
    if isinstance(residues, np.ndarray):
        return residues.astype(float, copy=False)
    residues = list(residues)
    if len(residues) == 0:
        return np.zeros((0, 3))
    if isinstance(residues[0], Residue):
        return np.stack([residue.position for residue in residues])
    return np.asarray(residues, dtype=float)


def distance(residues1, residues2):
    """
    Measure the Euclidean distance between residues (or coordinates).

    Parameters
    ----------
    residues1, residues2 : Residue or iterable of Residue or ndarray
        The residues whose distance is measured.
        The shapes must be broadcastable.

    Returns
    -------
    dist : float or ndarray
        The distance(s) in Å.
    """
    diff = coord(residues2) - coord(residues1)
    return np.sqrt(np.sum(diff * diff, axis=-1))


def centroid(residues):
    """
    Measure the centroid, i.e. the per-axis mean of the coordinates.

    Parameters
    ----------
    residues : iterable of Residue or ndarray, shape=(n,3)
        The residues to determine the centroid from.

    Returns
    -------
    centroid : ndarray, shape=(3,)
        The centroid.
    """
    return np.mean(coord(residues), axis=-2)


def translate(residues, vector):
    """
    Translate residues by a given vector.

    Parameters
    ----------
    residues : iterable of Residue
        The residues to be translated.
    vector : array-like, shape=(3,)
        The translation vector :math:`(x, y, z)`.

    Returns
    -------
    translated : list of Residue
        Copies of the input residues with translated positions.
        IDs and bonds are retained.
    """
    vector = np.asarray(vector, dtype=float)
    if vector.shape != (3,):
        raise ValueError("Translation vector must contain 3 coordinates")
    translated = []
    for residue in residues:
        residue = residue.copy()
        residue.position = residue.position + vector
        translated.append(residue)
    return translated


def recenter(residues):
    """
    Move residues so that their centroid is at the origin.

    Parameters
    ----------
    residues : iterable of Residue
        The residues to be centered.

    Returns
    -------
    centered : list of Residue
        Translated copies of the input residues.
        An empty list is returned for empty input.
    """
    residues = list(residues)
    if len(residues) == 0:
        return []
    return translate(residues, -centroid(residues))
