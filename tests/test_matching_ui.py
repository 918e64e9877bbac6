# tests/test_matching_ui.py
from __future__ import annotations

import json
from datetime import datetime
from typing import Any, List

import httpx
import pytest

from talent_sdk.client import TalentClient
from talent_sdk.endpoints import ApiEndpoints, DataCenter
from talent_sdk.exceptions import TalentApiError, TalentError, TalentTransportError
from talent_sdk.matching_ui import MatchingUIClient, ui_transaction_id
from talent_sdk.rest.rest_client import RestClient
from talent_sdk.schemas.documents import ParsedJob, ParsedJobWithId, ParsedResume, ParsedResumeWithId
from talent_sdk.schemas.matching import FilterCriteria, JobTargets, ResumeTargets
from talent_sdk.schemas.matching_ui import ServerSideHook, UIOptions, UserActionHookCollection


@pytest.fixture
def anyio_backend():
    return "asyncio"


class _Server:
    """Answers every request with a fresh response built from the same arguments."""

    def __init__(self, status_code: int, **kwargs: Any):
        self.status_code = status_code
        self.kwargs = kwargs
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, **self.kwargs)


def _client(server: _Server) -> TalentClient:
    return TalentClient("acct", "key", DataCenter("https://api.example.com"), transport=httpx.MockTransport(server))


OPTIONS = UIOptions(
    username="recruiter@example.com",
    show_web_sourcing=True,
    hooks=UserActionHookCollection(
        server_side=[
            ServerSideHook(link_text="Send", url="https://hooks.example.com", custom_info={"my_key": "v"})
        ]
    ),
)


def test_ui_returns_matching_ui_client() -> None:
    ui = _client(_Server(200, json={})).ui(OPTIONS)
    assert isinstance(ui, MatchingUIClient)
    assert ui.options is OPTIONS


@pytest.mark.anyio
async def test_ui_match_resume_wraps_request_and_returns_url() -> None:
    server = _Server(200, json={"url": "https://ui.example.com/session/1"})
    ui = _client(server).ui(OPTIONS)

    resp = await ui.match_resume(ParsedResume(), ["idx"], num_results=5)

    assert resp.url == "https://ui.example.com/session/1"
    sent = server.requests[0]
    assert sent.url.path == "/ui/v10/matcher/resume"

    body = json.loads(sent.content)
    assert body["SaasRequest"]["IndexIdsToSearchInto"] == ["idx"]
    assert body["SaasRequest"]["Take"] == 5
    assert body["UIOptions"]["Username"] == "recruiter@example.com"
    assert body["UIOptions"]["ShowWebSourcing"] is True
    # free-form hook payload is sent verbatim
    assert body["UIOptions"]["Hooks"]["ServerSide"][0]["CustomInfo"] == {"my_key": "v"}


@pytest.mark.anyio
async def test_ui_variants_hit_ui_paths() -> None:
    server = _Server(200, json={"Url": "https://ui.example.com/s"})
    ui = _client(server).ui()

    await ui.match_job(ParsedJob(), ["idx"])
    await ui.match_indexed_document("idx", "d1", ["idx"])
    await ui.search(["idx"], FilterCriteria(search_expression="x"))
    await ui.bimetric_score_resume(
        ParsedResumeWithId(id="s", resume_data=ParsedResume()),
        JobTargets([ParsedJobWithId(id="j", job_data=ParsedJob())]),
    )
    resp = await ui.bimetric_score_job(
        ParsedJobWithId(id="s", job_data=ParsedJob()),
        ResumeTargets([ParsedResumeWithId(id="r", resume_data=ParsedResume())]),
    )

    assert resp.url == "https://ui.example.com/s"
    assert [r.url.path for r in server.requests] == [
        "/ui/v10/matcher/joborder",
        "/ui/v10/matcher/indexes/idx/documents/d1",
        "/ui/v10/searcher",
        "/ui/v10/scorer/bimetric/resume",
        "/ui/v10/scorer/bimetric/joborder",
    ]
    assert "UIOptions" not in json.loads(server.requests[0].content)


@pytest.mark.anyio
async def test_ui_failure_uses_raw_body_and_synthesized_transaction_id() -> None:
    server = _Server(400, content=b'{"error": "bad options"}', headers={"Content-Type": "application/json"})

    with pytest.raises(TalentApiError) as ei:
        await _client(server).ui().search(["idx"], None)

    err = ei.value
    assert err.status_code == 400
    assert err.message == '{"error": "bad options"}'
    assert err.code == "Error"
    assert err.transaction_id.startswith("matchui-")


@pytest.mark.anyio
async def test_ui_transport_failure() -> None:
    def _timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    client = TalentClient("acct", "key", DataCenter("https://api.example.com"), transport=httpx.MockTransport(_timeout))

    with pytest.raises(TalentTransportError) as ei:
        await client.ui().match_resume(ParsedResume(), ["idx"])

    assert ei.value.status_code == 408


def test_ui_transaction_id_format() -> None:
    assert ui_transaction_id(datetime(2024, 1, 2, 3, 4, 5)) == "matchui-2024-01-02T03:04:05"


@pytest.mark.anyio
async def test_ui_match_indexed_document_rejects_empty_ids() -> None:
    server = _Server(200, json={"url": "https://ui.example.com/s/1"})

    with pytest.raises(ValueError, match="index_id is required"):
        await _client(server).ui().match_indexed_document("", "doc", ["idx"])

    assert server.requests == []


@pytest.mark.anyio
async def test_ui_client_works_from_its_collaborators_alone() -> None:
    server = _Server(500, content=b'{"error": "boom"}', headers={"Content-Type": "application/json"})
    made: List[Any] = []

    def make_error(exc_type, operation, request, response, message, **details) -> TalentError:
        made.append(operation)
        return exc_type(message, status_code=response.status_code, **details)

    ui = MatchingUIClient(
        RestClient("https://api.example.com", transport=httpx.MockTransport(server)),
        ApiEndpoints(DataCenter("https://api.example.com")),
        make_error,
    )

    with pytest.raises(TalentApiError) as ei:
        await ui.search(["idx"], None)

    assert made == ["ui_search"]
    assert ei.value.message == '{"error": "boom"}'
    assert ei.value.transaction_id.startswith("matchui-")
