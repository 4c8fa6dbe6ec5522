# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "pepcraft.database.rcsb"
__author__ = "The Pepcraft contributors"
__all__ = ["fetch"]

import logging
import requests
from pepcraft.database.error import RemoteError, TransportError

_logger = logging.getLogger(__name__)

_standard_url = "https://files.rcsb.org/download/"


def fetch(pdb_id, app_url=_standard_url):
    """
    Download a structure file in PDB format from the RCSB PDB.

    This function requires an internet connection.

    Parameters
    ----------
    pdb_id : str
        The PDB ID of the structure to be downloaded, e.g. ``'1l2y'``.
    app_url : str, optional
        The base URL of the download service.
        By default the RCSB file download service is used.

    Returns
    -------
    text : str
        The content of the PDB file.

    Raises
    ------
    TransportError
        If the server could not be reached or responded with an
        unsuccessful status code (e.g. for an unknown PDB ID).
    RemoteError
        If the response does not contain a structure file.

    Warnings
    --------
    Even if you give valid input to this function, in rare cases the
    database might return no or malformed data to you.
    In these cases the request should be retried.

    Examples
    --------

    >>> text = fetch("1l2y")
    >>> print(text.splitlines()[0][:6])
    HEADER
    """
    pdb_id = pdb_id.strip()
    url = f"{app_url}{pdb_id}.pdb"
    _logger.debug("Fetching %s", url)
    try:
        response = requests.get(url)
    except requests.RequestException as e:
        raise TransportError(f"Failed to fetch PDB ID {pdb_id}: {e}") from e
    if not response.ok:
        raise TransportError(
            f"Failed to fetch PDB ID {pdb_id}: "
            f"server responded with status {response.status_code}",
            response.status_code,
        )
    content = response.text
    _assert_valid_file(content, pdb_id)
    return content


def _assert_valid_file(response_text, pdb_id):
    """
    Checks whether the response is an actual structure file
    or an error page delivered with a successful status code.
    """
    if len(response_text.strip()) == 0 or any(
        err_msg in response_text
        for err_msg in [
            "404 Not Found",
            "<title>RCSB Protein Data Bank Error Page</title>",
            "<title>PDB Archive over AWS</title>",
        ]
    ):
        raise RemoteError(f"PDB ID {pdb_id} is invalid")
