# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.application.foldseek"
__author__ = "The Pepcraft contributors"
__all__ = ["FoldseekWebApp"]

import logging
import requests
from pepcraft.application.application import AppState, requires_state
from pepcraft.application.foldseek.match import FoldseekMatch
from pepcraft.application.webapp import WebApp
from pepcraft.database.error import EmptyResultError, RemoteError, TransportError
from pepcraft.structure.error import ValidationError
from pepcraft.structure.graph import ResidueGraph
from pepcraft.structure.io.pdb.convert import export_residues

_logger = logging.getLogger(__name__)

_foldseek_url = "https://search.foldseek.com/api"


class FoldseekWebApp(WebApp):
    """
    Search a structure database for structures similar to the query
    structure using the web-based Foldseek application.

    The query is written as PDB file, where each residue is represented
    by its *C-alpha* atom.
    The job is submitted with :func:`start()` and the matches are
    obtained via :func:`get_matches()` after :func:`join()`.

    Parameters
    ----------
    query : ResidueGraph or iterable of Residue
        The query structure.
        If a :class:`ResidueGraph` is given, its generation is recorded,
        so that :func:`is_stale()` can tell whether the graph was
        modified during the search.
    mode : str, optional
        The Foldseek search mode.
    databases : iterable of str, optional
        The Foldseek databases to search in.
    app_url : str, optional
        URL of the Foldseek API.
        By default the public Foldseek server is used.
    obey_rules : bool, optional
        If true, two server contacts are at least
        :attr:`contact_delay` seconds apart.
    min_residues : int, optional
        The minimum number of residues of a query.
    max_matches : int, optional
        The maximum number of matches taken from each database.
    poll_interval : float, optional
        The time (in seconds) between two status checks.
    cancel_token : CancellationToken, optional
        The token that is observed while waiting for the server.

    Raises
    ------
    ValidationError
        If the query has too few residues or cannot be written into a
        PDB file.
        In this case the server is not contacted.
    """

    contact_delay = 0.5

    def __init__(
        self,
        query,
        mode="3diaa",
        databases=("pdb100",),
        app_url=_foldseek_url,
        obey_rules=True,
        min_residues=3,
        max_matches=10,
        poll_interval=1.0,
        cancel_token=None,
    ):
        super().__init__(app_url, obey_rules, cancel_token)

        if isinstance(query, ResidueGraph):
            self._generation = query.generation
        else:
            self._generation = None
        residues = list(query)
        if len(residues) < min_residues:
            raise ValidationError(
                f"Need at least {min_residues} residues to search, "
                f"got {len(residues)}"
            )
        export = export_residues(residues)
        if not export.is_valid:
            raise ValidationError(
                "The query cannot be written into a PDB file: "
                + "; ".join(export.warnings)
            )
        self._query = export.text
        self._mode = mode
        self._databases = list(databases)
        self._max_matches = max_matches
        self._poll_interval = poll_interval

        self._ticket_id = None
        self._status_data = None
        self._matches = None

    def run(self):
        files = {"q": ("query.pdb", self._query, "text/plain")}
        data = {"mode": self._mode, "database[]": self._databases}
        self.contact()
        try:
            response = requests.post(f"{self.app_url()}/ticket", files=files, data=data)
        except requests.RequestException as e:
            raise TransportError(f"Failed to submit the search: {e}") from e
        if not response.ok:
            raise TransportError(
                f"Foldseek API error: {response.status_code}", response.status_code
            )
        try:
            ticket = response.json()
        except ValueError as e:
            raise TransportError(
                "The response to the submission is not valid JSON",
                response.status_code,
            ) from e
        ticket_id = ticket.get("id") if isinstance(ticket, dict) else None
        if not ticket_id:
            raise TransportError(
                "No ticket ID received from Foldseek", response.status_code
            )
        self._ticket_id = ticket_id
        _logger.info("Submitted Foldseek search with ticket %s", ticket_id)

    def is_finished(self):
        self.contact()
        try:
            response = requests.get(f"{self.app_url()}/ticket/{self._ticket_id}")
        except requests.RequestException as e:
            raise TransportError(f"Failed to check the search status: {e}") from e
        if not response.ok:
            raise TransportError(
                f"Foldseek API error: {response.status_code}", response.status_code
            )
        try:
            status_data = response.json()
        except ValueError as e:
            raise RemoteError("The search status is not valid JSON") from e
        if not isinstance(status_data, dict) or status_data.get("status") is None:
            raise RemoteError("The search status is missing in the response")

        status = str(status_data["status"]).upper()
        _logger.debug("Ticket %s has status %s", self._ticket_id, status)
        if status == "ERROR":
            raise RemoteError(
                f"Search failed: {status_data.get('error') or 'Unknown error'}"
            )
        if status == "COMPLETE":
            self._status_data = status_data
            return True
        return False

    def wait_interval(self):
        return self._poll_interval

    def evaluate(self):
        result = self._status_data.get("result")
        if not isinstance(result, dict) or result.get("results") is None:
            raise RemoteError("No results returned from search")
        if not isinstance(result["results"], list):
            raise RemoteError("Malformed search result")

        matches = []
        for entry in result["results"]:
            if not isinstance(entry, dict):
                raise RemoteError("Malformed search result")
            database = entry.get("db")
            alignments = entry.get("alignments") or []
            if not isinstance(alignments, list):
                raise RemoteError("Malformed search result")
            # Some server versions group the alignments per query chain
            if len(alignments) > 0 and isinstance(alignments[0], list):
                alignments = [
                    aln
                    for group in alignments
                    for aln in (group if isinstance(group, list) else [group])
                ]
            for alignment in alignments[: self._max_matches]:
                matches.append(FoldseekMatch.from_alignment(alignment, database))
        if len(matches) == 0:
            raise EmptyResultError("No similar structures found")
        _logger.info(
            "Foldseek search %s found %d matches", self._ticket_id, len(matches)
        )
        self._matches = matches

    @requires_state(AppState.JOINED)
    def get_matches(self):
        """
        Get the structures found by the search.

        Returns
        -------
        matches : list of FoldseekMatch
            The matches in the order reported by the server.
        """
        return self._matches

    @requires_state(AppState.RUNNING | AppState.FINISHED | AppState.JOINED)
    def get_ticket_id(self):
        """
        Get the ticket ID assigned by the server.

        Returns
        -------
        ticket_id : str
            The ticket ID.
        """
        return self._ticket_id

    def is_stale(self, graph):
        """
        Check whether the query graph was modified after this
        application was created.

        Parameters
        ----------
        graph : ResidueGraph
            The graph the query was taken from.

        Returns
        -------
        stale : bool
            True, if the graph was modified in the meantime.
            Always false, if the query was not given as
            :class:`ResidueGraph`.
        """
        if self._generation is None:
            return False
        return graph.generation != self._generation
