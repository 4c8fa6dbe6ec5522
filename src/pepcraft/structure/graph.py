# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.structure"
__author__ = "The Pepcraft contributors"
__all__ = ["ResidueGraph"]

import numpy as np
from pepcraft.copyable import Copyable
from pepcraft.structure.info.amino_acids import normalize_code
from pepcraft.structure.residue import Residue

# Distinguishes 'not given' from an explicit 'None' (= remove the bond)
_UNSET = object()


class ResidueGraph(Copyable):
    """
    The authoritative container of residues and their linear
    connectivity.

    Residues are stored in insertion order and are addressed by their
    ID.
    Bonds are modeled as the :attr:`Residue.connected_to` ID of the
    bonded residue, hence removing a residue can never leave a dangling
    reference behind: all bonds pointing to it are removed as well.

    All operations are total with respect to IDs: Operations on IDs
    that are not part of the graph are silently ignored.
    Malformed coordinates are still rejected with a :class:`ValueError`.

    Every mutating operation increments :attr:`generation`.
    A consumer that starts a long running operation on the graph content
    (e.g. a structure search) can record the generation and later detect
    whether the graph has changed in the meantime.

    Attributes
    ----------
    selected_id : str or None
        The ID of the currently selected residue.
    generation : int
        The number of modifications since the creation of the graph.

    Examples
    --------

    >>> graph = ResidueGraph()
    >>> gly_id = graph.add("Gly", [0, 0, 0])
    >>> ala_id = graph.add("ALA", [3.8, 0, 0])
    >>> graph.connect(ala_id, gly_id)
    >>> print(graph.get(ala_id).type)
    Ala
    >>> print(graph.get(ala_id).connected_to == gly_id)
    True
    >>> graph.remove(gly_id)
    >>> print(graph.get(ala_id).connected_to)
    None
    """

    def __init__(self, residues=None):
        self._residues = {}
        self._selected_id = None
        self._generation = 0
        if residues is not None:
            for residue in residues:
                self._residues[residue.id] = residue

    @property
    def selected_id(self):
        return self._selected_id

    @property
    def generation(self):
        return self._generation

    @property
    def residues(self):
        """
        list of Residue : The residues in insertion order.
        The list is a new object, but the residues are not copied.
        """
        return list(self._residues.values())

    @property
    def coord(self):
        """
        ndarray, shape=(n,3), dtype=float : The positions of all
        residues in insertion order.
        """
        if len(self._residues) == 0:
            return np.zeros((0, 3))
        return np.stack([residue.position for residue in self._residues.values()])

    def get(self, residue_id):
        """
        Get a residue by its ID.

        Parameters
        ----------
        residue_id : str
            The residue ID.

        Returns
        -------
        residue : Residue or None
            The residue, or ``None`` if the ID is not part of the graph.
        """
        return self._residues.get(residue_id)

    def add(self, type, position):
        """
        Add a new, unbonded residue with identity rotation.

        Parameters
        ----------
        type : str
            The amino acid code.
            Codes of canonical amino acids are normalized
            (e.g. ``'GLY'`` becomes ``'Gly'``), other codes are stored
            unchanged.
        position : array-like of float, shape=(3,)
            The coordinates of the residue.

        Returns
        -------
        residue_id : str
            The freshly generated ID of the new residue.

        Raises
        ------
        ValueError
            If `position` does not have shape *(3,)*.
        """
        normalized = normalize_code(type)
        residue = Residue(type if normalized is None else normalized, position)
        self._residues[residue.id] = residue
        self._generation += 1
        return residue.id

    def update(
        self, residue_id, type=None, position=None, rotation=None,
        connected_to=_UNSET
    ):
        """
        Change properties of a residue.

        Only the given properties are changed.
        Nothing happens, if `residue_id` is not part of the graph.

        Parameters
        ----------
        residue_id : str
            The ID of the residue to be changed.
        type : str, optional
            The new amino acid code.
        position : array-like of float, shape=(3,), optional
            The new position.
        rotation : array-like of float, shape=(4,), optional
            The new orientation quaternion.
        connected_to : str or None, optional
            The ID of the new bond partner.
            ``None`` removes the bond.
            Bonds of a residue to itself are ignored.

        Raises
        ------
        ValueError
            If `position` does not have shape *(3,)* or `rotation` does
            not have shape *(4,)*.
        """
        residue = self._residues.get(residue_id)
        if residue is None:
            return
        if type is not None:
            normalized = normalize_code(type)
            residue.type = type if normalized is None else normalized
        if position is not None:
            residue.position = position
        if rotation is not None:
            residue.rotation = rotation
        if connected_to is not _UNSET and connected_to != residue_id:
            residue.connected_to = connected_to
        self._generation += 1

    def remove(self, residue_id):
        """
        Remove a residue.

        Bonds of other residues to the removed residue are removed as
        well and the selection is cleared, if the removed residue was
        selected.

        Parameters
        ----------
        residue_id : str
            The ID of the residue to be removed.
        """
        if residue_id not in self._residues:
            return
        del self._residues[residue_id]
        for residue in self._residues.values():
            if residue.connected_to == residue_id:
                residue.connected_to = None
        if self._selected_id == residue_id:
            self._selected_id = None
        self._generation += 1

    def connect(self, from_id, to_id):
        """
        Bond a residue to another residue.

        Only the presence of `from_id` is checked.
        The caller must ensure that `to_id` is part of the graph.
        An already existing bond of `from_id` is replaced.

        Parameters
        ----------
        from_id : str
            The ID of the residue whose :attr:`Residue.connected_to` is
            set.
        to_id : str
            The ID of the bond partner.
        """
        residue = self._residues.get(from_id)
        if residue is None or from_id == to_id:
            return
        residue.connected_to = to_id
        self._generation += 1

    def select(self, residue_id):
        """
        Select a residue or clear the selection.

        Parameters
        ----------
        residue_id : str or None
            The ID of the residue to be selected.
            ``None`` clears the selection.
            IDs that are not part of the graph are ignored.
        """
        if residue_id is None or residue_id in self._residues:
            self._selected_id = residue_id

    def clear(self):
        """
        Remove all residues and clear the selection.
        """
        self._residues = {}
        self._selected_id = None
        self._generation += 1

    def replace_all(self, residues, expected_generation=None):
        """
        Replace the entire content of the graph and clear the selection.

        Parameters
        ----------
        residues : iterable of Residue
            The new residues.
        expected_generation : int, optional
            If given, the content is only replaced if the graph is
            still at this generation, i.e. it has not been modified
            since the caller recorded the generation.

        Returns
        -------
        replaced : bool
            False, if the content was not replaced because of a
            generation mismatch, true otherwise.
        """
        if (
            expected_generation is not None
            and expected_generation != self._generation
        ):
            return False
        self._residues = {residue.id: residue for residue in residues}
        self._selected_id = None
        self._generation += 1
        return True

    def bonds(self):
        """
        Get all bonds whose partner residue is part of the graph.

        Returns
        -------
        bonds : list of tuple(str, str)
            The ``(from_id, to_id)`` pairs in insertion order of the
            ``from`` residues.
        """
        return [
            (residue.id, residue.connected_to)
            for residue in self._residues.values()
            if residue.connected_to is not None
            and residue.connected_to in self._residues
        ]

    def __copy_create__(self):
        return ResidueGraph([residue.copy() for residue in self._residues.values()])

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone._selected_id = self._selected_id
        clone._generation = self._generation

    def __len__(self):
        return len(self._residues)

    def __iter__(self):
        return iter(list(self._residues.values()))

    def __contains__(self, residue_id):
        return residue_id in self._residues

    def __str__(self):
        return "\n".join(str(residue) for residue in self._residues.values())
