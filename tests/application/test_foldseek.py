# This source code is part of the Pepcraft package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import threading
import time
import pytest
import requests
import pepcraft.application.foldseek as foldseek
import pepcraft.structure as struc
from pepcraft.application import (
    AppState,
    AppStateError,
    CancellationToken,
    CancelledError,
    TimeoutError,
)
from pepcraft.database import EmptyResultError, RemoteError, TransportError
from tests.util import MockResponse, cannot_connect_to

FOLDSEEK_URL = "https://search.foldseek.com/api"
TICKET_ID = "ticket-0123"

ALIGNMENTS = [
    {"target": "1l2y_A", "score": 87.5, "tname": "TRP-CAGE", "qlen": 4, "tlen": 20},
    {"target": "2jof-assembly1.cif.gz_A"},
]


class MockFoldseek:
    """
    A scripted Foldseek server.

    The submission is answered with `submit_response`, each status
    request with the next entry of `status_responses`, repeating the
    last one.
    """

    def __init__(self, status_responses, submit_response=None):
        if submit_response is None:
            submit_response = MockResponse(200, {"id": TICKET_ID, "status": "PENDING"})
        self.submit_response = submit_response
        self.status_responses = list(status_responses)
        self.submissions = []
        self.polls = []

    def post(self, url, *args, **kwargs):
        self.submissions.append((url, kwargs))
        return self.submit_response

    def get(self, url, *args, **kwargs):
        self.polls.append(url)
        index = min(len(self.polls), len(self.status_responses)) - 1
        return self.status_responses[index]


def status(name, **kwargs):
    return MockResponse(200, {"status": name, **kwargs})


def complete(alignments=ALIGNMENTS, db="pdb100"):
    return status("COMPLETE", result={"results": [{"db": db, "alignments": alignments}]})


@pytest.fixture
def query():
    graph = struc.ResidueGraph()
    for i, code in enumerate(["Gly", "Ala", "Trp", "Lys"]):
        graph.add(code, [i * struc.BOND_DISTANCE, 0, 0])
    return graph


@pytest.fixture
def server(monkeypatch):
    """
    Install a scripted server, that completes after two pending status
    checks.
    """
    server = MockFoldseek([status("PENDING"), status("RUNNING"), complete()])
    monkeypatch.setattr(requests, "post", server.post)
    monkeypatch.setattr(requests, "get", server.get)
    return server


def install(monkeypatch, server):
    monkeypatch.setattr(requests, "post", server.post)
    monkeypatch.setattr(requests, "get", server.get)
    return server


def create_app(query, **kwargs):
    return foldseek.FoldseekWebApp(query, obey_rules=False, poll_interval=0, **kwargs)


def test_search(server, query):
    """
    Check the complete life cycle of a search against a server that
    needs three status checks to complete the search.
    """
    app = create_app(query)
    assert app.get_app_state() == AppState.CREATED
    app.start()
    assert app.get_ticket_id() == TICKET_ID
    app.join()
    assert app.get_app_state() == AppState.JOINED
    matches = app.get_matches()

    assert len(server.polls) == 3
    assert server.polls[0] == f"{FOLDSEEK_URL}/ticket/{TICKET_ID}"
    assert matches == [
        foldseek.FoldseekMatch("1l2y", 87.5, "TRP-CAGE", 4, 20, "pdb100", "1l2y_A"),
        foldseek.FoldseekMatch(
            "2jof-assembly1.cif.gz", 0, "Unknown", 0, 0, "pdb100",
            "2jof-assembly1.cif.gz_A",
        ),
    ]


def test_submission(server, query):
    """
    Check that the query is submitted as multipart PDB file together
    with the search mode and databases.
    """
    app = create_app(query, databases=["pdb100", "afdb50"])
    app.start()
    url, kwargs = server.submissions[0]
    assert url == f"{FOLDSEEK_URL}/ticket"
    file_name, content, content_type = kwargs["files"]["q"]
    assert file_name == "query.pdb"
    assert content_type == "text/plain"
    assert content.splitlines()[0][17:20] == "GLY"
    assert content.splitlines()[-1] == "END"
    assert kwargs["data"] == {"mode": "3diaa", "database[]": ["pdb100", "afdb50"]}


def test_case_insensitive_status(monkeypatch, query):
    install(monkeypatch, MockFoldseek([status("pending"), complete()]))
    app = create_app(query)
    app.start()
    app.join()
    assert len(app.get_matches()) == 2


def test_max_matches(monkeypatch, query):
    alignments = [{"target": f"{i}abc_A", "score": 100 - i} for i in range(15)]
    install(monkeypatch, MockFoldseek([complete(alignments)]))
    app = create_app(query)
    app.start()
    app.join()
    matches = app.get_matches()
    # Server order is kept
    assert [m.target_id for m in matches] == [f"{i}abc" for i in range(10)]


def test_grouped_alignments(monkeypatch, query):
    install(monkeypatch, MockFoldseek([complete([ALIGNMENTS])]))
    assert len(foldseek.search_structure(query, obey_rules=False, poll_interval=0)) == 2


@pytest.mark.parametrize(
    "submit_response",
    [
        MockResponse(500),
        MockResponse(200, {"status": "PENDING"}),
        MockResponse(200, text="<html>Maintenance</html>"),
    ],
)
def test_submit_error(monkeypatch, query, submit_response):
    """
    A failed submission raises a TransportError without any status
    check.
    """
    server = install(monkeypatch, MockFoldseek([complete()], submit_response))
    app = create_app(query)
    with pytest.raises(TransportError):
        app.start()
    assert server.polls == []
    assert app.get_app_state() == AppState.CANCELLED


def test_submit_connection_error(monkeypatch, query):
    def post(url, *args, **kwargs):
        raise requests.ConnectionError("Connection refused")

    monkeypatch.setattr(requests, "post", post)
    with pytest.raises(TransportError):
        create_app(query).start()


def test_remote_error(monkeypatch, query):
    install(
        monkeypatch,
        MockFoldseek([status("PENDING"), status("ERROR", error="Invalid query")]),
    )
    app = create_app(query)
    app.start()
    with pytest.raises(RemoteError, match="Invalid query"):
        app.join()
    assert app.get_app_state() == AppState.CANCELLED


def test_remote_error_default_message(monkeypatch, query):
    install(monkeypatch, MockFoldseek([status("ERROR")]))
    app = create_app(query)
    app.start()
    with pytest.raises(RemoteError, match="Unknown error"):
        app.join()


@pytest.mark.parametrize(
    "response",
    [MockResponse(200, text="not json"), MockResponse(200, {"id": TICKET_ID})],
)
def test_malformed_status(monkeypatch, query, response):
    install(monkeypatch, MockFoldseek([response]))
    app = create_app(query)
    app.start()
    with pytest.raises(RemoteError):
        app.join()


def test_status_http_error(monkeypatch, query):
    install(monkeypatch, MockFoldseek([status("PENDING"), MockResponse(502)]))
    app = create_app(query)
    app.start()
    with pytest.raises(TransportError) as excinfo:
        app.join()
    assert excinfo.value.status_code == 502


@pytest.mark.parametrize(
    "response",
    [
        status("COMPLETE"),
        status("COMPLETE", result={}),
    ],
)
def test_missing_results(monkeypatch, query, response):
    install(monkeypatch, MockFoldseek([response]))
    app = create_app(query)
    app.start()
    with pytest.raises(RemoteError, match="No results"):
        app.join()


@pytest.mark.parametrize(
    "result",
    [
        {"results": {"pdb100": []}},
        {"results": ["pdb100"]},
        {"results": [{"db": "pdb100", "alignments": {"target": "1l2y_A"}}]},
        {"results": [{"db": "pdb100", "alignments": ["1l2y_A"]}]},
    ],
)
def test_malformed_results(monkeypatch, query, result):
    """
    Unexpected JSON types in the result payload are reported as
    :class:`RemoteError`.
    """
    install(monkeypatch, MockFoldseek([status("COMPLETE", result=result)]))
    app = create_app(query)
    app.start()
    with pytest.raises(RemoteError, match="Malformed search result"):
        app.join()
    assert app.get_app_state() == AppState.CANCELLED


@pytest.mark.parametrize(
    "response",
    [
        complete([]),
        status("COMPLETE", result={"results": []}),
    ],
)
def test_empty_result(monkeypatch, query, response):
    install(monkeypatch, MockFoldseek([response]))
    app = create_app(query)
    app.start()
    with pytest.raises(EmptyResultError):
        app.join()


@pytest.mark.parametrize("n_residues", [0, 1, 2])
def test_too_few_residues(server, n_residues):
    """
    An unsuitable query is rejected before the server is contacted.
    """
    graph = struc.ResidueGraph()
    for i in range(n_residues):
        graph.add("Gly", [i * struc.BOND_DISTANCE, 0, 0])
    with pytest.raises(struc.ValidationError):
        create_app(graph)
    assert server.submissions == []
    assert server.polls == []


def test_invalid_query(server):
    residues = [
        struc.Residue("Gly", [0, 0, 0]),
        struc.Residue("Ala", [float("nan"), 0, 0]),
        struc.Residue("Trp", [7.6, 0, 0]),
    ]
    with pytest.raises(struc.ValidationError):
        create_app(residues)
    assert server.submissions == []


def test_min_residues(server):
    residues = [struc.Residue("Gly", [0, 0, 0])]
    app = create_app(residues, min_residues=1)
    app.start()
    app.join()
    assert len(app.get_matches()) == 2


def test_max_polls(monkeypatch, query):
    """
    A search that never completes is terminated after the given number
    of status checks.
    """
    server = install(monkeypatch, MockFoldseek([status("PENDING")]))
    app = create_app(query)
    app.start()
    with pytest.raises(TimeoutError):
        app.join(max_polls=5)
    assert len(server.polls) == 5
    assert app.get_app_state() == AppState.CANCELLED


def test_timeout(monkeypatch, query):
    install(monkeypatch, MockFoldseek([status("PENDING")]))
    app = foldseek.FoldseekWebApp(query, obey_rules=False, poll_interval=0.01)
    app.start()
    with pytest.raises(TimeoutError):
        app.join(timeout=0.05)
    assert app.get_app_state() == AppState.CANCELLED


def test_cancel_token(monkeypatch, query):
    """
    Cancelling the token from another thread interrupts a pending wait.
    """
    install(monkeypatch, MockFoldseek([status("PENDING")]))
    token = CancellationToken()
    app = foldseek.FoldseekWebApp(
        query, obey_rules=False, poll_interval=60, cancel_token=token
    )
    app.start()
    timer = threading.Timer(0.1, token.cancel)
    timer.start()
    try:
        with pytest.raises(CancelledError):
            app.join()
    finally:
        timer.cancel()
    assert app.get_app_state() == AppState.CANCELLED


def test_cancel_during_poll(monkeypatch, query):
    """
    A token cancelled during a status check is noticed directly after
    the check.
    """
    token = CancellationToken()
    server = MockFoldseek([status("PENDING")])

    def get(url, *args, **kwargs):
        token.cancel()
        return server.get(url, *args, **kwargs)

    monkeypatch.setattr(requests, "post", server.post)
    monkeypatch.setattr(requests, "get", get)
    app = create_app(query, cancel_token=token)
    app.start()
    with pytest.raises(CancelledError):
        app.join()
    assert len(server.polls) == 1


def test_cancel_during_final_poll(monkeypatch, query):
    """
    A token cancelled during the status check that reports completion
    prevents the evaluation of the results.
    """
    token = CancellationToken()
    server = MockFoldseek([complete()])

    def get(url, *args, **kwargs):
        token.cancel()
        return server.get(url, *args, **kwargs)

    monkeypatch.setattr(requests, "post", server.post)
    monkeypatch.setattr(requests, "get", get)
    app = create_app(query, cancel_token=token)
    app.start()
    with pytest.raises(CancelledError):
        app.join()
    assert app.get_app_state() == AppState.CANCELLED
    with pytest.raises(AppStateError):
        app.get_matches()


def test_cancelled_before_start(server, query):
    token = CancellationToken()
    token.cancel()
    app = create_app(query, cancel_token=token)
    with pytest.raises(CancelledError):
        app.start()
    assert server.submissions == []


def test_cancel(server, query):
    app = create_app(query)
    app.start()
    app.cancel()
    assert app.cancel_token.is_cancelled()
    assert app.get_app_state() == AppState.CANCELLED
    with pytest.raises(AppStateError):
        app.join()
    with pytest.raises(AppStateError):
        app.get_matches()


def test_app_state_errors(server, query):
    app = create_app(query)
    with pytest.raises(AppStateError):
        app.join()
    with pytest.raises(AppStateError):
        app.cancel()
    app.start()
    with pytest.raises(AppStateError):
        app.start()
    with pytest.raises(AppStateError):
        app.get_matches()


def test_contact_delay(monkeypatch, server, query):
    """
    With obeyed rules, consecutive server contacts are at least
    :attr:`contact_delay` apart, even with a zero poll interval.
    """
    monkeypatch.setattr(foldseek.FoldseekWebApp, "contact_delay", 0.05)
    app = foldseek.FoldseekWebApp(query, poll_interval=0)
    start = time.monotonic()
    app.start()
    app.join()
    # One submission and three status checks
    assert time.monotonic() - start >= 0.14
    assert len(app.get_matches()) == 2


def test_cancel_during_contact_delay(monkeypatch, server, query):
    monkeypatch.setattr(foldseek.FoldseekWebApp, "contact_delay", 60)
    token = CancellationToken()
    app = foldseek.FoldseekWebApp(query, poll_interval=0, cancel_token=token)
    app.start()
    timer = threading.Timer(0.1, token.cancel)
    timer.start()
    try:
        with pytest.raises(CancelledError):
            app.join()
    finally:
        timer.cancel()
    assert len(server.polls) == 0


def test_retry_after_failed_submission(monkeypatch, query):
    """
    A search can be repeated directly after a failed submission.
    """
    monkeypatch.setattr(foldseek.FoldseekWebApp, "contact_delay", 0.01)
    server = install(monkeypatch, MockFoldseek([complete()]))
    submit_responses = [
        MockResponse(500),
        MockResponse(200, {"id": TICKET_ID, "status": "PENDING"}),
    ]

    def post(url, *args, **kwargs):
        server.submissions.append((url, kwargs))
        return submit_responses[len(server.submissions) - 1]

    monkeypatch.setattr(requests, "post", post)
    with pytest.raises(TransportError):
        foldseek.search_structure(query, poll_interval=0)
    matches = foldseek.search_structure(query, poll_interval=0)
    assert len(server.submissions) == 2
    assert len(matches) == 2


def test_stale(server, query):
    app = create_app(query)
    app.start()
    assert not app.is_stale(query)
    query.add("Met", [20, 0, 0])
    app.join()
    assert app.is_stale(query)
    # Residue lists have no generation
    assert not create_app(list(query)).is_stale(query)


def test_search_structure(server, query):
    matches = foldseek.search_structure(query, obey_rules=False, poll_interval=0)
    assert [m.target_id for m in matches] == ["1l2y", "2jof-assembly1.cif.gz"]


def test_search_structure_max_polls(monkeypatch, query):
    install(monkeypatch, MockFoldseek([status("PENDING")]))
    with pytest.raises(TimeoutError):
        foldseek.search_structure(
            query, max_polls=3, obey_rules=False, poll_interval=0
        )


@pytest.mark.skipif(
    cannot_connect_to(FOLDSEEK_URL), reason="Foldseek is not available"
)
def test_search_online():
    graph = struc.ResidueGraph()
    for i, code in enumerate(["Gly", "Ala", "Trp", "Lys", "Leu", "Ser"]):
        graph.add(code, [i * struc.BOND_DISTANCE, (i % 2) * 1.5, 0])
    try:
        matches = foldseek.search_structure(graph, timeout=300)
    except EmptyResultError:
        # A short artificial backbone may legitimately find nothing
        return
    assert all(isinstance(m, foldseek.FoldseekMatch) for m in matches)
