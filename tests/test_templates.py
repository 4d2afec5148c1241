from datetime import datetime

import pytest

from thesis_portal.notifiers.templates import (
    format_application_date, get_email_body, get_email_subject, render_html,
)


@pytest.mark.parametrize("value, expected", [
    (datetime(2023, 11, 20, 9, 0), "Monday, 20/11/2023"),
    (datetime(2024, 2, 29, 23, 59), "Thursday, 29/02/2024"),
    (datetime(2024, 1, 7), "Sunday, 07/01/2024"),
])
def test_format_application_date(value, expected):
    assert format_application_date(value) == expected


def test_subjects():
    assert get_email_subject("Accepted") == "Your thesis application has been accepted"
    assert get_email_subject("Rejected") == "Your thesis application has been rejected"


def test_body_mentions_everything():
    body = get_email_body("Accepted", "P19", "Graph networks", "Monday, 20/11/2023", "Smith John", "Taylor Robert")

    assert body.startswith("Dear Smith John,")
    assert "P19" in body and "Graph networks" in body
    assert "Monday, 20/11/2023" in body
    assert "accepted" in body
    assert body.rstrip().endswith("Taylor Robert")


def test_rejection_body():
    body = get_email_body("Rejected", "P19", "Graph networks", "Monday, 20/11/2023", "Smith John", "Taylor Robert")

    assert "rejected" in body
    assert "accepted" not in body


def test_render_html_keeps_paragraphs():
    html = render_html("Dear John,\n\nline one\nline two\n")

    assert html == "<html><body><p>Dear John,</p><p>line one<br>line two<br></p></body></html>"
