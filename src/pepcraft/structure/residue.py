# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.structure"
__author__ = "The Pepcraft contributors"
__all__ = ["Residue", "IDENTITY_ROTATION", "new_residue_id"]

import uuid
import numpy as np
from pepcraft.copyable import Copyable


IDENTITY_ROTATION = (0.0, 0.0, 0.0, 1.0)


def new_residue_id():
    """
    Generate a new residue ID.

    The IDs are random and hence never reused, even across different
    :class:`ResidueGraph` instances.

    Returns
    -------
    residue_id : str
        The new ID.
    """
    return f"residue-{uuid.uuid4().hex}"


class Residue(Copyable):
    """
    A single amino acid residue, represented by one position in space.

    Parameters
    ----------
    type : str
        The three-letter code of the amino acid, e.g. ``'Gly'``.
    position : array-like of float, shape=(3,)
        The x, y and z coordinates in Å.
    rotation : array-like of float, shape=(4,), optional
        The orientation as unit quaternion *(x, y, z, w)*.
        By default, the identity rotation is used.
        The rotation is not considered for bonding.
    connected_to : str, optional
        The ID of the residue this residue is bonded to.
    id : str, optional
        The residue ID.
        By default, a new unique ID is generated.

    Attributes
    ----------
    id : str
        The residue ID.
    type : str
        The three-letter code of the amino acid.
    position : ndarray, shape=(3,), dtype=float
        The coordinates in Å.
    rotation : ndarray, shape=(4,), dtype=float
        The orientation quaternion.
    connected_to : str or None
        The ID of the bonded residue, or ``None`` if this residue is a
        terminus or unbonded.

    Examples
    --------

    >>> residue = Residue("Ala", [1, 2, 3])
    >>> print(residue.position)
    [1. 2. 3.]
    >>> print(residue.connected_to)
    None
    """

    def __init__(self, type, position, rotation=None, connected_to=None, id=None):
        self.id = new_residue_id() if id is None else id
        self.type = type
        self.position = position
        self.rotation = IDENTITY_ROTATION if rotation is None else rotation
        self.connected_to = connected_to

    @property
    def position(self):
        return self._position

    @position.setter
    def position(self, value):
        position = np.array(value, dtype=float)
        if position.shape != (3,):
            raise ValueError("Position must be array-like with shape (3,)")
        self._position = position

    @property
    def rotation(self):
        return self._rotation

    @rotation.setter
    def rotation(self, value):
        rotation = np.array(value, dtype=float)
        if rotation.shape != (4,):
            raise ValueError("Rotation must be a quaternion with shape (4,)")
        self._rotation = rotation

    def __copy_create__(self):
        return Residue(
            self.type,
            self.position,
            self.rotation,
            self.connected_to,
            self.id,
        )

    def __str__(self):
        x, y, z = self.position
        bond = "" if self.connected_to is None else f" -> {self.connected_to}"
        return f"{self.type:3} {x:8.3f} {y:8.3f} {z:8.3f}  {self.id}{bond}"

    def __repr__(self):
        return (
            f"Residue({self.type!r}, {self.position.tolist()!r}, "
            f"rotation={self.rotation.tolist()!r}, "
            f"connected_to={self.connected_to!r}, id={self.id!r})"
        )
