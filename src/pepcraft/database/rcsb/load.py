# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.database.rcsb"
__author__ = "The Pepcraft contributors"
__all__ = ["fetch_residues", "load_structure"]

import logging
from pepcraft.database.rcsb.download import _standard_url, fetch
from pepcraft.structure.error import ParseError
from pepcraft.structure.geometry import recenter
from pepcraft.structure.io.pdb.convert import import_residues

_logger = logging.getLogger(__name__)


def fetch_residues(pdb_id, app_url=_standard_url):
    """
    Download a structure from the RCSB PDB and convert it into
    residues centered at the origin.

    Each residue is represented by its *C-alpha* atom.
    The per-axis mean of the coordinates is subtracted from each
    position, so that the structure is centered at the origin
    independent of its original reference frame.

    This function requires an internet connection.

    Parameters
    ----------
    pdb_id : str
        The PDB ID of the structure.
    app_url : str, optional
        The base URL of the download service.

    Returns
    -------
    residues : list of Residue
        The centered residues with new IDs and without bonds.

    Raises
    ------
    TransportError, RemoteError
        If the download failed.
    ParseError
        If the file does not contain any amino acid residue.
    """
    text = fetch(pdb_id, app_url)
    residues = import_residues(text)
    if len(residues) == 0:
        raise ParseError(f"No valid residues found in the PDB file of {pdb_id}")
    return recenter(residues)


def load_structure(graph, pdb_id, expected_generation=None, app_url=_standard_url):
    """
    Download a structure from the RCSB PDB and replace the entire
    content of a :class:`ResidueGraph` with it.

    The graph is only modified after the download and conversion
    succeeded completely.
    The selection of the graph is cleared.

    Parameters
    ----------
    graph : ResidueGraph
        The graph whose content is replaced.
    pdb_id : str
        The PDB ID of the structure.
    expected_generation : int, optional
        If given, the content is only replaced if the graph was not
        modified since the caller recorded this
        :attr:`ResidueGraph.generation`.
    app_url : str, optional
        The base URL of the download service.

    Returns
    -------
    loaded : bool
        False, if the graph was modified in the meantime and hence left
        untouched, true otherwise.

    Raises
    ------
    TransportError, RemoteError
        If the download failed.
    ParseError
        If the file does not contain any amino acid residue.
    """
    residues = fetch_residues(pdb_id, app_url)
    loaded = graph.replace_all(residues, expected_generation)
    if loaded:
        _logger.info("Loaded %d residues of %s", len(residues), pdb_id)
    else:
        _logger.warning(
            "Discarded %s, since the structure was modified in the meantime",
            pdb_id,
        )
    return loaded
