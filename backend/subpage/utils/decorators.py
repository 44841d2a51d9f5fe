from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt
from subpage.application.subpage.load_page import load_page

def roles_required(*allowed_roles):
    """Rejects the request unless the token's ``role`` claim is allowed."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claims = get_jwt()

            if claims.get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator

def course_scoped(fn):
    """
    Rejects the request when the token is limited to other courses
    (``courses`` claim) than the one the route works on.
    """
    @wraps(fn)
    def wrapper(*args, **kwargs):
        courses = get_jwt().get("courses")
        if courses is not None:
            course_id = kwargs.get("course_id")
            if course_id is None and "cmid" in kwargs:
                course_id = load_page(cmid=kwargs["cmid"]).course.id
            if course_id not in courses:
                return jsonify({"error": "Course mismatch"}), 403

        return fn(*args, **kwargs)
    return wrapper
