from functools import wraps

from flask import request, jsonify
from flask_login import current_user
from werkzeug.datastructures import MultiDict


def json_formdata():
    """Expose a JSON request body to WTForms the way a submitted HTML form would look."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    formdata = MultiDict()
    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        formdata.add(key, str(value) if not isinstance(value, str) else value)
    return formdata


def bind_form(form_class):
    return form_class(formdata=json_formdata(), meta={"csrf": False})


def validation_error(form):
    return jsonify({"error": "Validation failed", "errors": form.errors}), 400


def current_user_id():
    return current_user.id if current_user.is_authenticated else None


# Role-based access control decorator
def role_required(role_name_or_list):
    allowed_roles = [role_name_or_list] if isinstance(role_name_or_list, str) else list(role_name_or_list)

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                return jsonify({"error": "Authentication required"}), 401
            if not current_user.is_active:
                return jsonify({"error": "Your account is not active. Please contact an administrator."}), 403
            # Admin has access to everything this decorator is applied to
            if current_user.is_admin or current_user.role in allowed_roles:
                return f(*args, **kwargs)
            return jsonify({"error": "You do not have permission to perform this action."}), 403
        return decorated_function
    return decorator
