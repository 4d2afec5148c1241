"""
Accept / reject endpoint: POST /api/applications/{application_id}
"""
from unittest.mock import patch

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from thesis_portal.core.errors import NotFound
from thesis_portal.models.application import Application
from thesis_portal.models.notification import StudentNotification
from thesis_portal.models.proposal import Proposal
from thesis_portal.services.notifications import StudentNotificationsService
from tests.factories import (
    auth_headers_for, make_application, make_proposal, make_student,
)


def reload(db, model, key):
    db.expire_all()
    return db.get(model, key)


def notifications_of(db, student_id):
    db.expire_all()
    return db.scalars(select(StudentNotification).where(StudentNotification.student_id == student_id)).all()


@pytest.mark.asyncio
async def test_accept_scenario(client: AsyncClient, db, application, teacher_headers, email_notifier):
    """A42 on P19 owned by T003, accepted by T003"""
    response = await client.post("/api/applications/A42", json={"status": "Accepted"}, headers=teacher_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["application"]["id"] == "A42"
    assert data["application"]["status"] == "Accepted"
    assert data["emailNotificationSent"] is True

    assert reload(db, Proposal, "P19").archived is True
    notifications = notifications_of(db, "S001")
    assert len(notifications) == 1
    assert notifications[0].status == "SMTP Accepted"
    email_notifier.send_email_notification.assert_awaited_once()


@pytest.mark.asyncio
async def test_accept_cancels_pending_siblings_only(client: AsyncClient, db, application, proposal, teacher, teacher_headers):
    second = make_student(db, "S002")
    third = make_student(db, "S003")
    make_application(db, "A43", proposal.proposal_id, second.id)
    make_application(db, "A44", proposal.proposal_id, third.id, status="Rejected")
    other = make_proposal(db, "P20", teacher.id)
    make_application(db, "A45", other.proposal_id, second.id)

    response = await client.post("/api/applications/A42", json={"status": "Accepted"}, headers=teacher_headers)

    assert response.status_code == 200
    assert reload(db, Application, "A42").status == "Accepted"
    assert reload(db, Application, "A43").status == "Cancelled"
    assert reload(db, Application, "A44").status == "Rejected"
    assert reload(db, Application, "A45").status == "Pending"
    assert reload(db, Proposal, "P20").archived is False
    # only the decided application's student is notified
    assert len(notifications_of(db, "S001")) == 1
    assert notifications_of(db, "S002") == []


@pytest.mark.asyncio
async def test_reject_leaves_siblings_and_proposal(client: AsyncClient, db, application, proposal, teacher_headers):
    sibling_student = make_student(db, "S002")
    make_application(db, "A43", proposal.proposal_id, sibling_student.id)

    response = await client.post("/api/applications/A42", json={"status": "Rejected"}, headers=teacher_headers)

    assert response.status_code == 200
    assert response.json()["application"]["status"] == "Rejected"
    assert reload(db, Application, "A43").status == "Pending"
    assert reload(db, Proposal, "P19").archived is False
    notifications = notifications_of(db, "S001")
    assert len(notifications) == 1
    assert notifications[0].content["application_decision"] == "Rejected"


@pytest.mark.asyncio
async def test_transport_failure_keeps_decision(client: AsyncClient, db, application, teacher_headers, email_notifier):
    email_notifier.send_email_notification.return_value = False

    response = await client.post("/api/applications/A42", json={"status": "Accepted"}, headers=teacher_headers)

    assert response.status_code == 200
    assert response.json()["emailNotificationSent"] is False
    assert reload(db, Application, "A42").status == "Accepted"
    assert reload(db, Proposal, "P19").archived is True
    notifications = notifications_of(db, "S001")
    assert len(notifications) == 1
    assert notifications[0].status == "SMTP Rejected"


@pytest.mark.asyncio
async def test_transport_exception_keeps_decision(client: AsyncClient, db, application, teacher_headers, email_notifier):
    email_notifier.send_email_notification.side_effect = ConnectionRefusedError("relay down")

    response = await client.post("/api/applications/A42", json={"status": "Rejected"}, headers=teacher_headers)

    assert response.status_code == 200
    assert response.json()["emailNotificationSent"] is False
    assert reload(db, Application, "A42").status == "Rejected"
    assert notifications_of(db, "S001")[0].status == "SMTP Rejected"


@pytest.mark.asyncio
@pytest.mark.parametrize("failure", [
    NotFound("Notification 1 not found"),
    OperationalError("UPDATE student_notifications", {}, Exception("database is locked")),
])
async def test_status_write_failure_after_send_keeps_decision(client: AsyncClient, db, application, teacher_headers,
                                                               email_notifier, failure):
    with patch.object(StudentNotificationsService, "update_student_notification_status", side_effect=failure):
        response = await client.post("/api/applications/A42", json={"status": "Accepted"}, headers=teacher_headers)

    assert response.status_code == 200
    assert response.json()["emailNotificationSent"] is False
    email_notifier.send_email_notification.assert_awaited_once()
    assert reload(db, Application, "A42").status == "Accepted"
    assert reload(db, Proposal, "P19").archived is True


@pytest.mark.asyncio
async def test_notification_content_payload(client: AsyncClient, db, application, teacher, student, teacher_headers, email_notifier):
    await client.post("/api/applications/A42", json={"status": "Accepted"}, headers=teacher_headers)

    notification = notifications_of(db, "S001")[0]
    assert notification.channel == "Application Decision"
    assert notification.subject == "Your thesis application has been accepted"
    assert notification.content == {
        "application_id": "A42",
        "application_decision": "Accepted",
        "proposal_id": "P19",
        "proposal_title": "Graph neural networks for chemistry",
        "application_date": "Monday, 20/11/2023",
        "student": f"{student.surname} {student.name}",
        "supervisor": f"{teacher.surname} {teacher.name}",
    }
    notification_id, to_email, subject, body = email_notifier.send_email_notification.await_args.args
    assert notification_id == notification.id
    assert to_email == student.email
    assert "Graph neural networks for chemistry" in body


@pytest.mark.asyncio
async def test_not_supervisor_is_forbidden(client: AsyncClient, db, application, other_teacher, email_notifier):
    response = await client.post(
        "/api/applications/A42", json={"status": "Accepted"}, headers=auth_headers_for(other_teacher)
    )

    assert response.status_code == 403
    assert response.json() == {"error": "Not authorized!"}
    assert reload(db, Application, "A42").status == "Pending"
    assert reload(db, Proposal, "P19").archived is False
    assert notifications_of(db, "S001") == []
    email_notifier.send_email_notification.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    {"status": "Cancelled"}, {"status": "accepted"}, {}, {"status": 1}, {"status": ["Accepted"]},
    ["Accepted"], "Accepted", None,
])
async def test_invalid_status_is_bad_request(client: AsyncClient, db, application, teacher_headers, body):
    response = await client.post("/api/applications/A42", json=body, headers=teacher_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid status field value in request body"}
    assert reload(db, Application, "A42").status == "Pending"
    assert notifications_of(db, "S001") == []


@pytest.mark.asyncio
async def test_unknown_application(client: AsyncClient, teacher, teacher_headers):
    response = await client.post("/api/applications/A999", json={"status": "Accepted"}, headers=teacher_headers)

    assert response.status_code == 404
    assert response.json() == {"error": "Application not found!"}


@pytest.mark.asyncio
async def test_second_decision_does_not_cascade_again(client: AsyncClient, db, application, proposal, teacher_headers, email_notifier):
    first = await client.post("/api/applications/A42", json={"status": "Rejected"}, headers=teacher_headers)
    assert first.status_code == 200

    late_student = make_student(db, "S002")
    make_application(db, "A43", proposal.proposal_id, late_student.id)

    second = await client.post("/api/applications/A42", json={"status": "Accepted"}, headers=teacher_headers)

    assert second.status_code == 409
    assert reload(db, Application, "A42").status == "Rejected"
    assert reload(db, Application, "A43").status == "Pending"
    assert reload(db, Proposal, "P19").archived is False
    assert len(notifications_of(db, "S001")) == 1
    assert email_notifier.send_email_notification.await_count == 1


@pytest.mark.asyncio
async def test_accept_on_already_archived_proposal_conflicts(client: AsyncClient, db, application, proposal, teacher_headers):
    proposal.archived = True
    db.commit()

    response = await client.post("/api/applications/A42", json={"status": "Accepted"}, headers=teacher_headers)

    assert response.status_code == 409
    assert reload(db, Application, "A42").status == "Pending"
    assert notifications_of(db, "S001") == []


@pytest.mark.asyncio
async def test_student_cannot_decide(client: AsyncClient, application, student_headers):
    response = await client.post("/api/applications/A42", json={"status": "Accepted"}, headers=student_headers)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_unauthenticated(client: AsyncClient, application):
    response = await client.post("/api/applications/A42", json={"status": "Accepted"})

    assert response.status_code == 401
