import pytest

from utils.db import mentees_col, mentors_col
from bson import ObjectId


@pytest.fixture
def pair(register):
    mentor = register(name="Grace", email="grace@x.com", mobile="1111111111").get_json()["user"]
    mentee = register(type="mentee", name="Alan", email="alan@x.com",
                      mobile="2222222222").get_json()["user"]
    return mentor, mentee


def _send(client, from_id, to_id):
    return client.post("/sendMentorshipRequest", json={"fromId": from_id, "toId": to_id})


def _notifications(col, user_id):
    return col.find_one({"_id": ObjectId(user_id)})["notifications"]


def test_send_request_notifies_recipient(client, pair):
    mentor, mentee = pair

    resp = _send(client, mentee["_id"], mentor["_id"])

    assert resp.status_code == 201
    notification = resp.get_json()["notification"]
    assert notification["type"] == "mentorship_request"
    assert notification["from_id"] == mentee["_id"]
    assert notification["from_role"] == "mentee"
    assert notification["message"] == "Alan sent you a mentorship request"

    stored = _notifications(mentors_col(), mentor["_id"])
    assert [n["id"] for n in stored] == [notification["id"]]


def test_send_request_validation(client, pair, register):
    mentor, mentee = pair
    other = register(name="Ada", email="ada@x.com", mobile="3333333333").get_json()["user"]

    assert client.post("/sendMentorshipRequest", json={"fromId": mentee["_id"]}).status_code == 400
    assert _send(client, other["_id"], mentor["_id"]).status_code == 400
    assert _send(client, mentee["_id"], str(ObjectId())).status_code == 404

    assert _send(client, mentee["_id"], mentor["_id"]).status_code == 201
    assert _send(client, mentee["_id"], mentor["_id"]).status_code == 400


def test_accept_connects_both_profiles(client, pair):
    mentor, mentee = pair
    notification = _send(client, mentee["_id"], mentor["_id"]).get_json()["notification"]

    resp = client.post("/acceptMentorshipRequest", json={
        "userId": mentor["_id"], "notificationId": notification["id"], "isMentor": True,
    })

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Mentorship request accepted"}

    stored_mentor = mentors_col().find_one({"_id": ObjectId(mentor["_id"])})
    stored_mentee = mentees_col().find_one({"_id": ObjectId(mentee["_id"])})
    assert stored_mentor["notifications"] == []
    assert stored_mentor["connections"] == [mentee["_id"]]
    assert stored_mentee["connections"] == [mentor["_id"]]
    assert [n["message"] for n in stored_mentee["notifications"]] == [
        "Grace accepted your mentorship request"
    ]

    # Already connected
    assert _send(client, mentee["_id"], mentor["_id"]).status_code == 400


def test_decline_removes_request(client, pair):
    mentor, mentee = pair
    notification = _send(client, mentor["_id"], mentee["_id"]).get_json()["notification"]

    resp = client.post("/declineMentorshipRequest", json={
        "userId": mentee["_id"], "notificationId": notification["id"], "isMentor": False,
    })

    assert resp.status_code == 200
    assert _notifications(mentees_col(), mentee["_id"]) == []
    assert mentees_col().find_one({"_id": ObjectId(mentee["_id"])})["connections"] == []
    replies = _notifications(mentors_col(), mentor["_id"])
    assert [n["type"] for n in replies] == ["info"]

    # Declining an info notification just dismisses it
    resp = client.post("/declineMentorshipRequest", json={
        "userId": mentor["_id"], "notificationId": replies[0]["id"], "isMentor": "true",
    })
    assert resp.status_code == 200
    assert _notifications(mentors_col(), mentor["_id"]) == []


def test_accept_errors(client, pair):
    mentor, mentee = pair
    notification = _send(client, mentee["_id"], mentor["_id"]).get_json()["notification"]

    missing = client.post("/acceptMentorshipRequest", json={"userId": mentor["_id"]})
    assert missing.status_code == 400

    # Wrong collection for this user
    wrong_role = client.post("/acceptMentorshipRequest", json={
        "userId": mentor["_id"], "notificationId": notification["id"], "isMentor": False,
    })
    assert wrong_role.status_code == 404

    unknown = client.post("/acceptMentorshipRequest", json={
        "userId": mentor["_id"], "notificationId": "nope", "isMentor": True,
    })
    assert unknown.status_code == 404
    assert unknown.get_json() == {"error": "Notification not found"}


def test_accept_only_mentorship_requests(client, pair):
    mentor, mentee = pair
    notification = _send(client, mentee["_id"], mentor["_id"]).get_json()["notification"]
    client.post("/declineMentorshipRequest", json={
        "userId": mentor["_id"], "notificationId": notification["id"], "isMentor": True,
    })
    info = _notifications(mentees_col(), mentee["_id"])[0]

    resp = client.post("/acceptMentorshipRequest", json={
        "userId": mentee["_id"], "notificationId": info["id"], "isMentor": False,
    })
    assert resp.status_code == 400


def test_syncdata_shows_pending_requests(client, pair):
    mentor, mentee = pair
    _send(client, mentee["_id"], mentor["_id"])

    user = client.post("/syncdata", json={"email": "grace@x.com"}).get_json()["user"]
    assert len(user["notifications"]) == 1


@pytest.mark.parametrize("path", [
    "/sendMentorshipRequest", "/acceptMentorshipRequest", "/declineMentorshipRequest",
])
def test_json_body_must_be_an_object(client, path):
    resp = client.post(path, json=["userId", "notificationId"])
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Request body must be a JSON object"}
