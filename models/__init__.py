# models/__init__.py

from .users import Profile, Mentor, Mentee, PROFILE_TYPES, parse_skills
from .notification import Notification

__all__ = [
    "Profile",
    "Mentor",
    "Mentee",
    "PROFILE_TYPES",
    "parse_skills",
    "Notification"
]
