# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This module places a freely moved residue onto the canonical bond
distance of its nearest neighbor.
"""

__name__ = "pepcraft.structure"
__author__ = "The Pepcraft contributors"
__all__ = ["BOND_DISTANCE", "SNAP_THRESHOLD", "find_snap_partner", "snap"]

import logging
import numpy as np
from pepcraft.structure.geometry import distance

_logger = logging.getLogger(__name__)

# Approximate distance between consecutive C-alpha atoms
BOND_DISTANCE = 3.8
SNAP_THRESHOLD = 5.0

# Fallback direction if the drop point coincides with the partner
_DEFAULT_DIRECTION = np.array([1.0, 0.0, 0.0])


def find_snap_partner(graph, residue_id, position, threshold=SNAP_THRESHOLD):
    """
    Find the residue a residue dropped at the given position would bond
    to.

    All residues except the dropped one are candidates, unless they are
    already bonded to the dropped residue.
    The nearest candidate is chosen, if its distance to `position` is
    below `threshold`.
    For equal distances the candidate added first to the graph wins.

    Parameters
    ----------
    graph : ResidueGraph
        The graph containing the residues.
    residue_id : str
        The ID of the dropped residue.
    position : array-like of float, shape=(3,)
        The drop point.
    threshold : float, optional
        Candidates must be closer than this distance (in Å).

    Returns
    -------
    partner_id : str or None
        The ID of the bond partner, or ``None`` if no candidate
        qualifies.
    """
    position = np.asarray(position, dtype=float)
    closest_id = None
    closest_distance = np.inf
    for other in graph:
        if other.id == residue_id:
            continue
        # The bond would point back at an existing reverse bond
        if other.connected_to == residue_id:
            continue
        dist = distance(position, other.position)
        if dist < closest_distance:
            closest_distance = dist
            closest_id = other.id
    if closest_distance < threshold:
        return closest_id
    return None


def snap(
    graph, residue_id, position,
    threshold=SNAP_THRESHOLD, bond_distance=BOND_DISTANCE
):
    """
    Move a residue to the position where it was dropped and bond it to
    its nearest neighbor, if there is one within the snap threshold.

    When a partner is found, the residue is placed on the line from the
    partner to the drop point, at exactly `bond_distance` from the
    partner, and :attr:`Residue.connected_to` of the dropped residue is
    set to the partner.
    The distance is not enforced on later moves.

    Parameters
    ----------
    graph : ResidueGraph
        The graph containing the residues.
        It is modified in place.
    residue_id : str
        The ID of the dropped residue.
        Nothing happens, if the ID is not part of the graph.
    position : array-like of float, shape=(3,)
        The drop point.
    threshold : float, optional
        The snap threshold (in Å).
    bond_distance : float, optional
        The distance between bonded residues (in Å).

    Returns
    -------
    partner_id : str or None
        The ID of the new bond partner, or ``None`` if the residue was
        left at the drop point without a new bond.

    See Also
    --------
    find_snap_partner : Partner search without modification

    Notes
    -----
    Only bonds pointing from a candidate to the dropped residue exclude
    the candidate.
    Hence, multiple residues may end up bonded to the same partner.

    Examples
    --------

    >>> graph = ResidueGraph()
    >>> gly_id = graph.add("Gly", [0, 0, 0])
    >>> ala_id = graph.add("Ala", [20, 0, 0])
    >>> partner_id = snap(graph, ala_id, [2, 0, 0])
    >>> print(partner_id == gly_id)
    True
    >>> print(graph.get(ala_id).position)
    [3.8 0.  0. ]
    """
    if residue_id not in graph:
        return None
    position = np.asarray(position, dtype=float)
    graph.update(residue_id, position=position)

    partner_id = find_snap_partner(graph, residue_id, position, threshold)
    if partner_id is None:
        return None

    partner_position = graph.get(partner_id).position
    direction = position - partner_position
    norm = np.linalg.norm(direction)
    if norm == 0:
        direction = _DEFAULT_DIRECTION
    else:
        direction = direction / norm
    graph.update(
        residue_id, position=partner_position + direction * bond_distance
    )
    graph.connect(residue_id, partner_id)
    _logger.debug("Snapped residue %s to %s", residue_id, partner_id)
    return partner_id
