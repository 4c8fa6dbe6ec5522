# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.structure.info"
__author__ = "The Pepcraft contributors"
__all__ = [
    "AminoAcid",
    "CATEGORIES",
    "amino_acids",
    "amino_acid",
    "normalize_code",
    "pdb_residue_name",
    "amino_acids_by_category",
    "search_amino_acids",
]

import json
from collections import namedtuple
from os.path import join, dirname, realpath


_info_dir = dirname(realpath(__file__))
# The catalog contains the 20 canonical amino acids,
# grouped into side chain categories for display purposes
with open(join(_info_dir, "amino_acids.json"), "r") as file:
    _catalog = json.load(file)


AminoAcid = namedtuple(
    "AminoAcid", ["name", "code", "symbol", "category", "description", "color"]
)

CATEGORIES = {
    category: (entry["label"], entry["color"])
    for category, entry in _catalog["categories"].items()
}

_amino_acids = [AminoAcid(**entry) for entry in _catalog["amino_acids"]]
_by_code = {aa.code.upper(): aa for aa in _amino_acids}
_by_symbol = {aa.symbol: aa for aa in _amino_acids}


def amino_acids():
    """
    Get the 20 canonical amino acids.

    Returns
    -------
    amino_acids : list of AminoAcid
        The amino acids in catalog order.
    """
    return list(_amino_acids)


def amino_acid(code):
    """
    Look up an amino acid by its three-letter code or one-letter
    symbol.

    The lookup is case-insensitive, i.e. ``'Gly'``, ``'GLY'``,
    ``'gly'`` and ``'G'`` all refer to glycine.

    Parameters
    ----------
    code : str
        The three-letter code or one-letter symbol.

    Returns
    -------
    amino_acid : AminoAcid or None
        The amino acid.
        ``None`` is returned, if `code` does not describe any of the
        canonical amino acids.

    Examples
    --------

    >>> print(amino_acid("TRP").name)
    Tryptophan
    >>> print(amino_acid("w").code)
    Trp
    """
    if not isinstance(code, str):
        return None
    code = code.strip().upper()
    if len(code) == 1:
        return _by_symbol.get(code)
    return _by_code.get(code)


def normalize_code(code):
    """
    Get the catalog form (e.g. ``'Gly'``) of an amino acid code.

    Parameters
    ----------
    code : str
        The three-letter code or one-letter symbol in any case.

    Returns
    -------
    code : str or None
        The normalized three-letter code, or ``None`` for unknown
        codes.
    """
    aa = amino_acid(code)
    return None if aa is None else aa.code


def pdb_residue_name(code):
    """
    Get the residue name used in PDB files (e.g. ``'GLY'``) for an
    amino acid code.

    Parameters
    ----------
    code : str
        The three-letter code or one-letter symbol in any case.

    Returns
    -------
    res_name : str or None
        The upper case three-letter code, or ``None`` for unknown
        codes.
    """
    aa = amino_acid(code)
    return None if aa is None else aa.code.upper()


def amino_acids_by_category():
    """
    Group the amino acids by their side chain category.

    Returns
    -------
    groups : dict of (str -> list of AminoAcid)
        Maps each category in :attr:`CATEGORIES` to its amino acids.
        The categories appear in the order of :attr:`CATEGORIES`.
    """
    return {
        category: [aa for aa in _amino_acids if aa.category == category]
        for category in CATEGORIES
    }


def search_amino_acids(query, candidates=None):
    """
    Filter amino acids by a free text query.

    An amino acid matches, if the query is a case-insensitive substring
    of its name, its three-letter code or its one-letter symbol.

    Parameters
    ----------
    query : str
        The search query.
        A blank query matches all amino acids.
    candidates : iterable of AminoAcid, optional
        The amino acids to be filtered.
        By default, all amino acids are searched.

    Returns
    -------
    matches : list of AminoAcid
        The matching amino acids in their original order.

    Examples
    --------

    >>> print([aa.code for aa in search_amino_acids("glu")])
    ['Glu', 'Gln']
    """
    if candidates is None:
        candidates = _amino_acids
    query = query.strip().lower()
    if not query:
        return list(candidates)
    return [
        aa
        for aa in candidates
        if query in aa.name.lower()
        or query in aa.code.lower()
        or query in aa.symbol.lower()
    ]
