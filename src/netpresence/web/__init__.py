"""Flask front end: registration and discovery keyed by the caller's address."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flask import Blueprint, Flask, Response, current_app, render_template, request
from pydantic import ValidationError
from werkzeug.middleware.proxy_fix import ProxyFix

from netpresence.domain.ports import StoreUnavailableError
from netpresence.web.schema import DevicesResponse, RegistrationQuery

if TYPE_CHECKING:
    from netpresence.domain.presence import PresenceService

EXTENSION_KEY = "netpresence"

log = logging.getLogger(__name__)

bp = Blueprint("presence", __name__)


def create_app(
    service: PresenceService | None = None,
    *,
    trust_proxy: bool = True,
    proxy_hops: int = 1,
) -> Flask:
    """Build the Flask application around ``service`` (configured adapters when omitted).

    With ``trust_proxy`` the client address is taken from the ``proxy_hops``-th
    right-most ``X-Forwarded-For`` value.
    """

    if service is None:
        from netpresence.app import build_presence_service  # noqa: PLC0415

        service = build_presence_service()

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = service
    if trust_proxy:
        app.wsgi_app = ProxyFix(  # type: ignore[method-assign]
            app.wsgi_app, x_for=proxy_hops, x_proto=1, x_host=1
        )
    app.register_blueprint(bp)
    app.register_error_handler(StoreUnavailableError, _store_unavailable)
    return app


def _service() -> PresenceService:
    return current_app.extensions[EXTENSION_KEY]


def _network_key() -> str:
    return request.remote_addr or ""


def _store_unavailable(exc: StoreUnavailableError) -> Response:
    log.exception("Store failure while handling %s %s", request.method, request.path, exc_info=exc)
    return Response("Internal Server Error", status=500, mimetype="text/plain")


@bp.post("/")
def register() -> Response:
    try:
        query = RegistrationQuery.model_validate(request.args.to_dict())
    except ValidationError as exc:
        fields = ", ".join(str(error["loc"][0]) for error in exc.errors())
        return Response(f"Missing or invalid query parameters: {fields}", status=400)
    _service().register(_network_key(), query.name, query.address)
    return Response(status=204)


@bp.get("/devices.json")
def devices_json() -> Response:
    payload = DevicesResponse.from_devices(_service().discover(_network_key()))
    return Response(payload.model_dump_json(), status=200, mimetype="application/json")


@bp.get("/")
def index() -> str:
    payload = DevicesResponse.from_devices(_service().discover(_network_key()))
    return render_template("index.html", devices=payload.devices)
