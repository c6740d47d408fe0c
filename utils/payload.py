from flask import request

from utils.errors import ValidationError


def json_object(required=False):
    """
    JSON request body as a dict. A missing body counts as {} unless
    required; anything that is not an object is a 400.
    """
    data = request.get_json(silent=True)
    if data is None and not required:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
