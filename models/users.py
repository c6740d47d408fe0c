from utils.db import mentors_col, mentees_col
from datetime import datetime


def parse_skills(skills):
    """Skills arrive as "python, go" or as a repeated form field."""
    if skills is None:
        return []
    if isinstance(skills, str):
        skills = [skills]
    parsed = []
    for entry in skills:
        parsed.extend(s.strip() for s in str(entry).split(",") if s.strip())
    return parsed


class Profile:
    role = None

    @staticmethod
    def collection():
        raise NotImplementedError

    def __init__(self, name, email, mobile, password, skills=None, photo=None,
                 notifications=None, connections=None, created_at=None, updated_at=None):
        self.name = name
        self.email = email
        self.mobile = mobile
        # Already hashed by the credential gate
        self.password = password
        self.skills = parse_skills(skills)
        self.photo = photo
        self.notifications = notifications or []
        self.connections = connections or []
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()

    # Convert to dictionary for MongoDB
    def to_dict(self):
        return {
            "name": self.name,
            "email": self.email,
            "mobile": self.mobile,
            "password": self.password,
            "skills": self.skills,
            "photo": self.photo,
            "role": self.role,
            "notifications": self.notifications,
            "connections": self.connections,
            "created_at": self.created_at,
            "updated_at": self.updated_at
        }

    # Save new profile, returns the stored document
    def save(self):
        doc = self.to_dict()
        result = self.collection().insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc


class Mentor(Profile):
    role = "mentor"

    @staticmethod
    def collection():
        return mentors_col()

    def __init__(self, name, email, mobile, password, skills=None, experience=None,
                 availability=None, **kwargs):
        super().__init__(name, email, mobile, password, skills=skills, **kwargs)
        self.experience = experience
        self.availability = availability

    def to_dict(self):
        data = super().to_dict()
        data["experience"] = self.experience
        data["availability"] = self.availability
        return data


class Mentee(Profile):
    role = "mentee"

    @staticmethod
    def collection():
        return mentees_col()


PROFILE_TYPES = {
    Mentor.role: Mentor,
    Mentee.role: Mentee,
}
