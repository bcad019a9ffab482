from flask import Blueprint, current_app, request
from werkzeug.exceptions import HTTPException

from ..extensions import store
from ..utils.envelope import fail, ok
from ..utils.users import (
    clean_field,
    is_duplicate_email,
    normalize_email,
    parse_index,
    validate_user,
)

bp = Blueprint("users_api", __name__)

UNSUPPORTED_ACTION = "unsupported action; use list | create | update | delete"


def _json_body() -> dict:
    # Unparseable or non-object bodies count as an empty payload.
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


def _requested_action() -> str:
    action = request.args.get("action")
    if action is None:
        action = request.form.get("action", "list")
    return action


def _reject(action: str, message: str, status: int):
    current_app.logger.info("users %s rejected (%s): %s", action, status, message)
    return fail(message, status)


def _check_user(name: str, email: str):
    return validate_user(
        name,
        email,
        name_max=current_app.config.get("NAME_MAX_LENGTH", 60),
        email_max=current_app.config.get("EMAIL_MAX_LENGTH", 120),
    )


def _payload_field(body: dict, key: str):
    # JSON null counts as absent, so the form value gets a chance.
    value = body.get(key)
    if value is None:
        value = request.form.get(key)
    return value


def list_users(users):
    return ok(users)


def create_user(users):
    body = _json_body()
    name = clean_field(_payload_field(body, "name"))
    email = clean_field(_payload_field(body, "email"))
    normalized = normalize_email(email)

    error = _check_user(name, email)
    if error:
        return _reject("create", error, 422)

    if is_duplicate_email(users, normalized):
        return _reject("create", "a user with that email already exists", 409)
    users.append({"name": name, "email": normalized})
    store.replace_all(users)

    current_app.logger.info("users create: index=%s total=%s", len(users) - 1, len(users))
    return ok(users, 201)


def update_user(users):
    body = _json_body()
    index = body.get("index")
    name = clean_field(body.get("name"))
    email = clean_field(body.get("email"))
    normalized = normalize_email(email)

    # JSON integers only; true/false and floats are not positions.
    if isinstance(index, bool) or not isinstance(index, int):
        return _reject("update", 'field "index" is invalid or missing', 422)

    if not 0 <= index < len(users):
        return _reject("update", "user index does not exist", 404)

    error = _check_user(name, email)
    if error:
        return _reject("update", error, 422)

    if is_duplicate_email(users, normalized, exclude_index=index):
        return _reject("update", "another user with that email already exists", 409)

    users[index] = {"name": name, "email": normalized}
    store.replace_all(users)

    current_app.logger.info("users update: index=%s total=%s", index, len(users))
    return ok(users)


def _requested_delete_index():
    raw = request.args.get("index")
    if raw is None:
        raw = _json_body().get("index")
    if raw is None:
        raw = request.form.get("index")
    return raw


def delete_user(users):
    raw = _requested_delete_index()
    if raw is None:
        return _reject("delete", 'missing "index" parameter for delete', 422)

    index = parse_index(raw)
    if index is None:
        return _reject("delete", 'field "index" is invalid or missing', 422)

    if not 0 <= index < len(users):
        return _reject("delete", "the given index does not exist", 404)
    del users[index]
    store.replace_all(users)

    current_app.logger.info("users delete: index=%s total=%s", index, len(users))
    return ok(users)


ROUTES = {
    ("GET", "list"): list_users,
    ("POST", "create"): create_user,
    ("POST", "update"): update_user,
    ("POST", "delete"): delete_user,
    ("DELETE", "delete"): delete_user,
}


@bp.route("/api.php", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
@bp.route("/api", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
def users_endpoint():
    # Every request reads the file first, whatever the action turns out to be.
    with store.transaction() as users:
        action = _requested_action()
        handler = ROUTES.get((request.method, action))
        if handler is None:
            return _reject(action, UNSUPPORTED_ACTION, 400)
        return handler(users)


@bp.errorhandler(Exception)
def users_internal_error(e):
    if isinstance(e, HTTPException):
        return e
    current_app.logger.exception("Unhandled error in users API")
    return fail("internal server error", 500)
