from bson import ObjectId
from datetime import datetime

MENTORSHIP_REQUEST = "mentorship_request"
INFO = "info"


class Notification:

    def __init__(self, message, type=INFO, from_id=None, from_role=None, id=None, created_at=None):
        self.id = id or str(ObjectId())
        self.type = type  # "mentorship_request" | "info"
        self.message = message
        self.from_id = str(from_id) if from_id else None
        self.from_role = from_role
        self.created_at = created_at or datetime.utcnow()

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "message": self.message,
            "from_id": self.from_id,
            "from_role": self.from_role,
            "created_at": self.created_at
        }

    @staticmethod
    def mentorship_request(sender, sender_role):
        return Notification(
            message=f"{sender.get('name')} sent you a mentorship request",
            type=MENTORSHIP_REQUEST,
            from_id=sender["_id"],
            from_role=sender_role,
        )


"""
Stored inside a profile's notifications list.
Example:
{
    "id": "665f1c2e9b1e8a0012345678",
    "type": "mentorship_request",
    "message": "Asha sent you a mentorship request",
    "from_id": "665f1c2e9b1e8a0087654321",
    "from_role": "mentee",
    "created_at": datetime
}
"""
