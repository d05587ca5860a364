"""Build the framework-free ``InboundRequest`` the services validate."""
from flask import request

from webapp.errors import MethodNotSupported
from webapp.services.validation import InboundRequest, Upload


def _credentials():
    auth = request.authorization
    if auth is None or auth.type.lower() != "basic":
        return None
    return auth.username, auth.password


def inbound(with_files=False):
    files = ()
    body = b""
    if with_files:
        files = tuple(
            Upload(
                field_name=name,
                filename=storage.filename or "",
                content_type=storage.mimetype,
                data=storage.read(),
            )
            for name, storage in request.files.items(multi=True)
        )
    else:
        body = request.get_data(cache=True)

    return InboundRequest(
        query=request.args.to_dict(),
        content_length=request.content_length or 0,
        chunked="chunked" in request.headers.get("Transfer-Encoding", "").lower(),
        credentials=_credentials(),
        has_authorization="Authorization" in request.headers,
        body=body,
        files=files,
    )


def reject_head():
    """GET routes answer HEAD with 405 instead of Flask's implicit HEAD."""
    if request.method == "HEAD":
        raise MethodNotSupported("HEAD")


def method_not_supported(**_):
    raise MethodNotSupported(request.method)
