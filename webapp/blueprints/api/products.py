"""Product routes under /v1/product."""
from webapp.blueprints.api import route
from webapp.blueprints.api.inbound import inbound, method_not_supported, reject_head
from webapp.extensions import get_services
from webapp.responses import to_response


@route("/product", methods=["POST"])
def create_product():
    return to_response(get_services().products.create(inbound()))


@route("/product", methods=["GET"])
def list_products():
    reject_head()
    return to_response(get_services().products.list(inbound()))


@route("/product/<product_id>", methods=["GET"])
def get_product(product_id):
    reject_head()
    return to_response(get_services().products.get(inbound(), product_id))


@route("/product/<product_id>", methods=["PUT"])
def replace_product(product_id):
    return to_response(get_services().products.replace(inbound(), product_id))


@route("/product/<product_id>", methods=["PATCH"])
def patch_product(product_id):
    return to_response(get_services().products.patch(inbound(), product_id))


@route("/product/<product_id>", methods=["DELETE"])
def delete_product(product_id):
    return to_response(get_services().products.delete(inbound(), product_id))


route("/product", methods=["OPTIONS"], endpoint="products_other")(method_not_supported)
route("/product/<product_id>", methods=["OPTIONS"], endpoint="product_other")(
    method_not_supported
)
