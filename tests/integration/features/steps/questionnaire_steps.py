"""Step definitions for questionnaire answering scenarios.

Every step talks to the live API over HTTP; caller identity is carried by
the trusted X-Auth-* headers the service reads.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Optional

import httpx
from behave import given, then, when


def _http_request(
    context,
    method: str,
    path: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    json_body: Any = None,
) -> httpx.Response:
    if getattr(context, "test_mock_mode", False):
        raise AssertionError("HTTP request attempted in TEST_MOCK_MODE")
    url = context.test_base_url + context.api_prefix.rstrip("/") + path
    hdrs = (headers or {}).copy()
    hdrs.setdefault("Accept", "application/json")
    with httpx.Client(timeout=httpx.Timeout(10.0)) as client:
        resp = client.request(method.upper(), url, headers=hdrs, json=json_body)
    context.last_response = resp
    return resp


def _headers_for(context, alias: str) -> Dict[str, str]:
    return context.vars["users"][alias]


def _state_for(context, alias: str) -> Dict[str, Any]:
    resp = _http_request(context, "GET", "/questionnaire", headers=_headers_for(context, alias))
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body is not None, f"{alias} has no questionnaire yet"
    return body


def _evidence_item_id(context, alias: str, ref: str) -> str:
    standard = int(ref.split(".", 1)[0])
    resp = _http_request(
        context, "GET", f"/questionnaire?standard={standard}", headers=_headers_for(context, alias)
    )
    assert resp.status_code == 200, resp.text
    for item in resp.json()["current_standard"]["items"]:
        if item["ref"] == ref:
            return item["evidence_item_id"]
    raise AssertionError(f"evidence item {ref} not found in standard {standard}")


def _save(context, actor: str, owner: str, ref: str, body: Dict[str, Any]) -> None:
    assessment_id = context.vars["assessments"][owner]
    item_id = _evidence_item_id(context, owner, ref)
    _http_request(
        context,
        "PUT",
        f"/assessments/{assessment_id}/answers/{item_id}",
        headers=_headers_for(context, actor),
        json_body=body,
    )


@given('a new practice manager "{alias}" is signed in')
def step_signed_in(context, alias: str):
    subject = f"it_{alias}_{uuid.uuid4().hex}"
    context.vars.setdefault("users", {})[alias] = {
        "X-Auth-Subject": subject,
        "X-Auth-Email": f"{alias}@example.nhs.uk",
        "X-Auth-Name": alias,
    }


@given('"{alias}" has onboarded the organisation "{name}" of type "{org_type}"')
def step_onboarded(context, alias: str, name: str, org_type: str):
    resp = _http_request(
        context,
        "POST",
        "/organisations",
        headers=_headers_for(context, alias),
        json_body={"name": name, "type": org_type},
    )
    assert resp.status_code == 201, resp.text
    state = _state_for(context, alias)
    context.vars.setdefault("assessments", {})[alias] = state["assessment_id"]


@when('"{alias}" opens the questionnaire')
def step_open_questionnaire(context, alias: str):
    _http_request(context, "GET", "/questionnaire", headers=_headers_for(context, alias))


@when('"{alias}" answers evidence item "{ref}" with yes/no "{value}"')
def step_answer_yes_no(context, alias: str, ref: str, value: str):
    _save(context, alias, alias, ref, {"yes_no_value": value})


@when('"{alias}" answers evidence item "{ref}" with text "{value}"')
def step_answer_text(context, alias: str, ref: str, value: str):
    _save(context, alias, alias, ref, {"text_value": value})


@when('"{actor}" tries to answer evidence item "{ref}" in the assessment of "{owner}" with yes/no "{value}"')
def step_answer_other_assessment(context, actor: str, ref: str, owner: str, value: str):
    _save(context, actor, owner, ref, {"yes_no_value": value})


@then("the response status is {status:d}")
def step_status(context, status: int):
    resp = context.last_response
    assert resp is not None
    assert resp.status_code == status, f"expected {status}, got {resp.status_code}: {resp.text}"


@then("the questionnaire lists {count:d} standards")
def step_standard_count(context, count: int):
    assert len(context.last_response.json()["standards"]) == count


@then("the current standard is {number:d}")
def step_current_standard(context, number: int):
    assert context.last_response.json()["current_standard"]["number"] == number


@then("the completion percent is {percent:g}")
def step_state_percent(context, percent: float):
    assert context.last_response.json()["completion_percent"] == percent


@then("the saved completion percent is {percent:g}")
def step_saved_percent(context, percent: float):
    resp = context.last_response
    assert resp.status_code == 200, resp.text
    assert resp.json()["completion_percent"] == percent


@then('the problem code is "{code}"')
def step_problem_code(context, code: str):
    resp = context.last_response
    assert resp.headers.get("content-type", "").startswith("application/problem+json")
    assert resp.json()["code"] == code
