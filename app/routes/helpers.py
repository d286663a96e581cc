"""
Request parsing shared by the API blueprints.
"""
from flask import request

from app.errors import ValidationError


def json_body() -> dict:
    """The JSON object sent with the request; anything else is a 400."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def record_body():
    """
    (data, upload) for create endpoints.

    Accepts either JSON or multipart/form-data with an optional "file" part.
    """
    if request.mimetype == 'multipart/form-data':
        data = request.form.to_dict()
        file = request.files.get('file')
        upload = None
        if file and file.filename:
            upload = {
                'filename': file.filename,
                'data': file.read(),
                'content_type': file.mimetype,
            }
        return data, upload
    return json_body(), None


def read_flag() -> bool:
    value = json_body().get('isRead')
    if not isinstance(value, bool):
        raise ValidationError('isRead must be true or false', field='isRead')
    return value
