"""Account routes under /v1/user."""
from flask import request

from webapp.blueprints.api import route
from webapp.blueprints.api.inbound import inbound, method_not_supported, reject_head
from webapp.extensions import get_services
from webapp.responses import to_response
from webapp.services.verification_service import VerificationError, verify_email


@route("/user", methods=["POST"])
def create_user():
    return to_response(get_services().accounts.create(inbound()))


@route("/user/verifyEmail", methods=["GET"])
def verify_user_email():
    """Consume the verification link mailed after registration."""
    reject_head()
    try:
        verify_email(
            get_services().verification_store,
            request.args.get("email", ""),
            request.args.get("token", ""),
        )
    except VerificationError as e:
        return f"<h1>Error</h1><p>{e}</p>", 400, {"Content-Type": "text/html; charset=utf-8"}
    return (
        "<h1>Success!</h1><p>Email verified successfully! You can now log in.</p>",
        200,
        {"Content-Type": "text/html; charset=utf-8"},
    )


@route("/user/<user_id>", methods=["GET"])
def get_user(user_id):
    reject_head()
    return to_response(get_services().accounts.get(inbound(), user_id))


@route("/user/<user_id>", methods=["PUT"])
def update_user(user_id):
    return to_response(get_services().accounts.update(inbound(), user_id))


route("/user/<user_id>", methods=["PATCH", "OPTIONS"], endpoint="user_other")(
    method_not_supported
)
