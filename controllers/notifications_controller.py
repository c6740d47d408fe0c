from flask import Blueprint, current_app, jsonify

from models.notification import MENTORSHIP_REQUEST, Notification
from utils.db import collection_for, to_object_id
from utils.errors import ConflictError, NotFoundError, ValidationError
from utils.identity import find_by_id
from utils.payload import json_object

notifications_bp = Blueprint("notifications", __name__)


def _as_bool(value):
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


def _find_notification(data):
    """Locate (user, role, notification) for an accept/decline request."""
    user_id = data.get("userId")
    notification_id = data.get("notificationId")
    if not user_id or not notification_id:
        raise ValidationError("userId and notificationId are required")

    role = "mentor" if _as_bool(data.get("isMentor")) else "mentee"
    oid = to_object_id(user_id)
    user = collection_for(role).find_one({"_id": oid}) if oid else None
    if not user:
        raise NotFoundError()

    for notification in user.get("notifications", []):
        if notification.get("id") == notification_id:
            return user, role, notification
    raise NotFoundError("Notification not found")


def _notify(role, user_id, notification):
    oid = to_object_id(user_id)
    if not role or oid is None:
        return False
    result = collection_for(role).update_one(
        {"_id": oid},
        {"$push": {"notifications": notification.to_dict()}}
    )
    return result.matched_count > 0


# Send a mentorship request (mentee -> mentor or mentor -> mentee)
@notifications_bp.route("/sendMentorshipRequest", methods=["POST"])
def send_mentorship_request():
    data = json_object()
    from_id = data.get("fromId")
    to_id = data.get("toId")
    if not from_id or not to_id:
        raise ValidationError("fromId and toId are required")

    sender, sender_role = find_by_id(from_id)
    recipient, recipient_role = find_by_id(to_id)

    if sender_role == recipient_role:
        raise ValidationError("Mentorship requests go between a mentor and a mentee")

    sender_id = str(sender["_id"])
    if sender_id in recipient.get("connections", []):
        raise ConflictError("Already connected")

    for pending in recipient.get("notifications", []):
        if pending.get("type") == MENTORSHIP_REQUEST and pending.get("from_id") == sender_id:
            raise ConflictError("Mentorship request already sent")

    notification = Notification.mentorship_request(sender, sender_role)
    _notify(recipient_role, recipient["_id"], notification)

    current_app.logger.info("Mentorship request %s -> %s", sender_id, recipient["_id"])
    return jsonify({"notification": notification.to_dict()}), 201


@notifications_bp.route("/acceptMentorshipRequest", methods=["POST"])
def accept_mentorship_request():
    data = json_object()
    user, role, notification = _find_notification(data)

    if notification.get("type") != MENTORSHIP_REQUEST:
        raise ValidationError("Notification is not a mentorship request")

    requester_id = notification.get("from_id")
    requester_role = notification.get("from_role")

    collection_for(role).update_one(
        {"_id": user["_id"]},
        {
            "$pull": {"notifications": {"id": notification["id"]}},
            "$addToSet": {"connections": requester_id}
        }
    )

    requester_oid = to_object_id(requester_id)
    if requester_role and requester_oid:
        collection_for(requester_role).update_one(
            {"_id": requester_oid},
            {"$addToSet": {"connections": str(user["_id"])}}
        )

    reply = Notification(
        message=f"{user.get('name')} accepted your mentorship request",
        from_id=user["_id"],
        from_role=role,
    )
    if not _notify(requester_role, requester_id, reply):
        current_app.logger.warning("Requester %s no longer exists", requester_id)

    current_app.logger.info("Mentorship request %s accepted by %s", notification["id"], user["_id"])
    return jsonify({"message": "Mentorship request accepted"})


@notifications_bp.route("/declineMentorshipRequest", methods=["POST"])
def decline_mentorship_request():
    data = json_object()
    user, role, notification = _find_notification(data)

    collection_for(role).update_one(
        {"_id": user["_id"]},
        {"$pull": {"notifications": {"id": notification["id"]}}}
    )

    if notification.get("type") == MENTORSHIP_REQUEST:
        reply = Notification(
            message=f"{user.get('name')} declined your mentorship request",
            from_id=user["_id"],
            from_role=role,
        )
        _notify(notification.get("from_role"), notification.get("from_id"), reply)

    current_app.logger.info("Notification %s declined by %s", notification["id"], user["_id"])
    return jsonify({"message": "Mentorship request declined"})
