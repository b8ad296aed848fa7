import asyncio

import pytest

from portfolio.services.contact import (
    GENERIC_FAILURE_MESSAGE,
    MISSING_FIELDS_MESSAGE,
    OFFLINE_FALLBACK_MESSAGE,
    PENDING_LABEL,
    ContactForm,
    ContactSubmission,
    SubmitButton,
)
from portfolio.services.notifications import NotificationCenter

from conftest import FakeHttpClient

URL = "http://backend.test/api/contact"


def _filled_form():
    return ContactForm(
        name="Ada",
        email="ada@example.com",
        message="Hi!",
        button=SubmitButton(label="Send Message"),
    )


def _notifications(body):
    return [c for c in body.children if c.has_class("notification")]


@pytest.mark.parametrize("missing", ["name", "email", "message"])
def test_missing_field_never_hits_network(missing, body, scheduler):
    form = _filled_form()
    setattr(form, missing, "")
    client = FakeHttpClient(response={"success": True, "message": "ok"})
    center = NotificationCenter(body, scheduler=scheduler)

    asyncio.run(ContactSubmission(form, client, center, url=URL).submit())

    assert client.calls == []
    (shown,) = _notifications(body)
    assert shown.text == MISSING_FIELDS_MESSAGE
    assert shown.has_class("notification-error")
    assert form.button.label == "Send Message"
    assert form.button.disabled is False


def test_success_notifies_and_resets(body, scheduler):
    form = _filled_form()
    client = FakeHttpClient(response={"success": True, "message": "Thanks, Ada!"})
    center = NotificationCenter(body, scheduler=scheduler)

    asyncio.run(ContactSubmission(form, client, center, url=URL).submit())

    assert client.calls == [("POST", URL, {"name": "Ada", "email": "ada@example.com", "message": "Hi!"})]
    (shown,) = _notifications(body)
    assert shown.text == "Thanks, Ada!"
    assert shown.has_class("notification-success")
    assert (form.name, form.email, form.message) == ("", "", "")
    assert form.button.label == "Send Message"
    assert form.button.disabled is False


@pytest.mark.parametrize(
    "response, expected",
    [
        ({"success": False, "error": "Invalid email"}, "Invalid email"),
        ({"success": False}, GENERIC_FAILURE_MESSAGE),
    ],
)
def test_server_failure_keeps_form(response, expected, body, scheduler):
    form = _filled_form()
    center = NotificationCenter(body, scheduler=scheduler)

    asyncio.run(ContactSubmission(form, FakeHttpClient(response=response), center, url=URL).submit())

    (shown,) = _notifications(body)
    assert shown.text == expected
    assert shown.has_class("notification-error")
    assert form.email == "ada@example.com"
    assert form.button.disabled is False


@pytest.mark.parametrize("error", [OSError("connection refused"), ValueError("Invalid JSON body")])
def test_transport_failure_falls_back_to_info(error, body, scheduler):
    form = _filled_form()
    center = NotificationCenter(body, scheduler=scheduler)

    asyncio.run(ContactSubmission(form, FakeHttpClient(error=error), center, url=URL).submit())

    (shown,) = _notifications(body)
    assert shown.text == OFFLINE_FALLBACK_MESSAGE
    assert shown.has_class("notification-info")
    assert (form.name, form.email, form.message) == ("", "", "")
    assert form.button.label == "Send Message"
    assert form.button.disabled is False


def test_unexpected_body_is_treated_as_transport_failure(body, scheduler):
    form = _filled_form()
    center = NotificationCenter(body, scheduler=scheduler)

    asyncio.run(ContactSubmission(form, FakeHttpClient(response=["not", "an", "object"]), center, url=URL).submit())

    assert center.current.kind == "info"


def test_button_is_pending_while_request_is_in_flight(body, scheduler):
    form = _filled_form()
    seen = {}

    class SlowClient:
        async def post_json(self, url, payload):
            seen["label"] = form.button.label
            seen["disabled"] = form.button.disabled
            return {"success": True, "message": "ok"}

    center = NotificationCenter(body, scheduler=scheduler)
    asyncio.run(ContactSubmission(form, SlowClient(), center, url=URL).submit())

    assert seen == {"label": PENDING_LABEL, "disabled": True}
    assert form.button.label == "Send Message"
    assert form.button.disabled is False
