"""Image routes nested under /v1/product/<product_id>/image."""
from webapp.blueprints.api import route
from webapp.blueprints.api.inbound import inbound, method_not_supported, reject_head
from webapp.extensions import get_services
from webapp.responses import to_response


@route("/product/<product_id>/image", methods=["POST"])
def create_image(product_id):
    return to_response(
        get_services().images.create(inbound(with_files=True), product_id)
    )


@route("/product/<product_id>/image", methods=["GET"])
def list_images(product_id):
    reject_head()
    return to_response(get_services().images.list(inbound(), product_id))


@route("/product/<product_id>/image/<image_id>", methods=["GET"])
def get_image(product_id, image_id):
    reject_head()
    return to_response(get_services().images.get(inbound(), product_id, image_id))


@route("/product/<product_id>/image/<image_id>", methods=["DELETE"])
def delete_image(product_id, image_id):
    return to_response(
        get_services().images.delete(inbound(), product_id, image_id)
    )


route("/product/<product_id>/image", methods=["OPTIONS"], endpoint="images_other")(
    method_not_supported
)
route(
    "/product/<product_id>/image/<image_id>",
    methods=["OPTIONS"],
    endpoint="image_other",
)(method_not_supported)
