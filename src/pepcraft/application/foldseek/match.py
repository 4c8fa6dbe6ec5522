# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.application.foldseek"
__author__ = "The Pepcraft contributors"
__all__ = ["FoldseekMatch"]

from pepcraft.database.error import RemoteError


class FoldseekMatch:
    """
    A structure from a Foldseek database that is similar to the query
    structure.

    All attributes of a :class:`FoldseekMatch` are public.
    The attributes are the same as the constructor parameters.

    Parameters
    ----------
    target_id : str
        The identifier of the matched structure, i.e. the part of
        `target` before the first underscore.
        For the *PDB100* database this is the PDB ID.
    score : float
        The alignment score reported by the server.
    display_name : str
        A human readable description of the matched structure.
    query_length, target_length : int
        The number of residues of the query and the target structure.
    database : str
        The database, the match was found in.
    target : str
        The complete target name as reported by the server, e.g.
        ``'1l2y_A'``.
    """

    def __init__(
        self,
        target_id,
        score,
        display_name,
        query_length,
        target_length,
        database=None,
        target=None,
    ):
        self.target_id = target_id
        self.score = score
        self.display_name = display_name
        self.query_length = query_length
        self.target_length = target_length
        self.database = database
        self.target = target_id if target is None else target

    @staticmethod
    def from_alignment(alignment, database=None):
        """
        Create a match from an alignment entry of a Foldseek result.

        Missing values are replaced by defaults.

        Parameters
        ----------
        alignment : dict
            The decoded JSON object of the alignment.
        database : str, optional
            The database the alignment belongs to.

        Returns
        -------
        match : FoldseekMatch
            The match.

        Raises
        ------
        RemoteError
            If the alignment is not a JSON object.
        """
        if not isinstance(alignment, dict):
            raise RemoteError("Malformed search result")
        target = str(alignment.get("target") or "")
        target_id = target.split("_")[0] or target
        return FoldseekMatch(
            target_id,
            alignment.get("score") or 0,
            alignment.get("tname") or "Unknown",
            alignment.get("qlen") or 0,
            alignment.get("tlen") or 0,
            database,
            target,
        )

    def __eq__(self, item):
        if not isinstance(item, FoldseekMatch):
            return False
        return (
            self.target_id == item.target_id
            and self.score == item.score
            and self.display_name == item.display_name
            and self.query_length == item.query_length
            and self.target_length == item.target_length
            and self.database == item.database
            and self.target == item.target
        )

    def __repr__(self):
        return (
            f"FoldseekMatch({self.target_id!r}, {self.score!r}, "
            f"{self.display_name!r}, {self.query_length!r}, "
            f"{self.target_length!r}, {self.database!r}, {self.target!r})"
        )

    def __str__(self):
        return f"{self.target_id}\t{self.score}\t{self.display_name}"
