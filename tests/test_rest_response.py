# tests/test_rest_response.py
from __future__ import annotations

import json

from talent_sdk.rest.rest_response import RestResponse
from talent_sdk.schemas.account import GetAccountInfoResponse

JSON_HEADERS = {"Content-Type": "application/json; charset=utf-8"}

OK_BODY = json.dumps(
    {
        "Info": {"Code": "Success", "Message": "ok", "TransactionId": "tx-1"},
        "Value": {"CreditsRemaining": 10},
    }
).encode("utf-8")


def test_success_sets_data_and_does_not_keep_body() -> None:
    resp = RestResponse.create(OK_BODY, 200, "OK", JSON_HEADERS, GetAccountInfoResponse)

    assert resp.is_successful
    assert resp.data is not None
    assert resp.data.info.transaction_id == "tx-1"
    assert resp.body is None
    assert resp.deserialization_error is None


def test_non_json_content_type_is_not_read() -> None:
    resp = RestResponse.create(OK_BODY, 200, "OK", {"Content-Type": "text/plain"}, GetAccountInfoResponse)

    assert resp.data is None
    assert resp.body is None
    assert resp.deserialization_error is None


def test_missing_content_type_is_not_read() -> None:
    resp = RestResponse.create(OK_BODY, 200, "OK", {}, GetAccountInfoResponse)
    assert resp.data is None
    assert resp.body is None


def test_malformed_body_on_2xx_records_fault_and_keeps_body() -> None:
    resp = RestResponse.create(b"{not json", 200, "OK", JSON_HEADERS, GetAccountInfoResponse)

    assert resp.data is None
    assert resp.body == "{not json"
    assert resp.deserialization_error is not None


def test_fault_is_recorded_for_any_2xx_status() -> None:
    resp = RestResponse.create(b"[1, 2", 202, "Accepted", JSON_HEADERS, GetAccountInfoResponse)
    assert resp.deserialization_error is not None


def test_error_status_never_sets_data_but_keeps_body_and_info() -> None:
    body = json.dumps(
        {"Info": {"Code": "Unauthorized", "Message": "bad key", "TransactionId": "tx-9"}}
    ).encode("utf-8")

    resp = RestResponse.create(body, 401, "Unauthorized", JSON_HEADERS, GetAccountInfoResponse)

    assert not resp.is_successful
    assert resp.data is None
    assert resp.deserialization_error is None
    assert resp.body == body.decode("utf-8")
    assert resp.error_info.code == "Unauthorized"
    assert resp.error_info.transaction_id == "tx-9"


def test_error_status_with_unparseable_body() -> None:
    resp = RestResponse.create(b"<html>", 500, "Server Error", JSON_HEADERS, GetAccountInfoResponse)

    assert resp.data is None
    assert resp.body == "<html>"
    assert resp.error_info is None
    assert resp.deserialization_error is None


def test_body_is_decoded_with_declared_charset() -> None:
    body = json.dumps({"Info": {"Code": "Success", "Message": "café"}}, ensure_ascii=False).encode("utf-16")

    resp = RestResponse.create(
        body, 200, "OK", {"Content-Type": "application/json; charset=utf-16"}, GetAccountInfoResponse
    )

    assert resp.data.info.message == "café"


def test_transport_error_envelope() -> None:
    resp = RestResponse.from_transport_error(408, "timed out")

    assert resp.transport_error
    assert resp.status_code == 408
    assert resp.status_description == "timed out"
    assert not resp.is_successful
    assert resp.data is None
