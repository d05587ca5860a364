import logging
from datetime import datetime, timezone

from webapp.errors import NotFound, StoreError, from_store_error
from webapp.models.image import Image
from webapp.models.product import Product
from webapp.responses import Outcome, serialize_product
from webapp.services import validation

logger = logging.getLogger(__name__)


class ProductService:
    """Product lifecycle: create, read, replace, patch, delete."""

    def __init__(self, repository, authorizer):
        self.repository = repository
        self.authorizer = authorizer

    def _fetch(self, product_id):
        try:
            product = self.repository.find(Product, product_id)
        except StoreError as e:
            raise from_store_error(e) from e
        if product is None:
            raise NotFound(f"product {product_id}")
        return product

    def _owned(self, principal, product_id):
        """Existence first, then ownership: a missing product is never a 403."""
        product = self._fetch(product_id)
        self.authorizer.require_owner(principal, product)
        return product

    def create(self, req):
        principal = self.authorizer.authenticate(req.credentials)
        draft = validation.validate_product(req)

        now = datetime.now(timezone.utc)
        try:
            product = self.repository.create(
                Product(
                    owner_user_id=principal.id,
                    date_added=now,
                    date_last_updated=now,
                    **draft.as_fields(),
                )
            )
        except StoreError as e:
            raise from_store_error(e) from e

        logger.info("Account %d created product %d", principal.id, product.id)
        return Outcome.created(serialize_product(product))

    def get(self, req, raw_product_id):
        product_id = validation.parse_id(raw_product_id)
        validation.check_read(req)
        return Outcome.ok(serialize_product(self._fetch(product_id)))

    def list(self, req):
        validation.check_read(req)
        try:
            products = self.repository.find_all(Product)
        except StoreError as e:
            raise from_store_error(e) from e
        return Outcome.ok([serialize_product(p) for p in products])

    def replace(self, req, raw_product_id):
        principal = self.authorizer.authenticate(req.credentials)
        product_id = validation.parse_id(raw_product_id)
        draft = validation.validate_product(req)
        product = self._owned(principal, product_id)
        self._apply(product, draft.as_fields())
        return Outcome.no_content()

    def patch(self, req, raw_product_id):
        principal = self.authorizer.authenticate(req.credentials)
        product_id = validation.parse_id(raw_product_id)
        patch = validation.validate_product_patch(req)
        product = self._owned(principal, product_id)
        self._apply(product, patch.as_fields())
        return Outcome.no_content()

    def _apply(self, product, fields):
        fields = dict(fields, date_last_updated=datetime.now(timezone.utc))
        try:
            self.repository.update(product, fields)
        except StoreError as e:
            raise from_store_error(e) from e
        logger.info("Updated product %d: %s", product.id, sorted(fields))

    def delete(self, req, raw_product_id):
        """Delete a product after its image records.

        Image records go first so a failure between the two steps never
        leaves an image pointing at a deleted product. Their blobs are not
        touched and are logged as orphans for the reconciliation sweep.
        """
        principal = self.authorizer.authenticate(req.credentials)
        product_id = validation.parse_id(raw_product_id)
        validation.check_read(req, anonymous=False)
        product = self._owned(principal, product_id)

        try:
            orphaned_keys = [
                image.s3_bucket_path
                for image in self.repository.find_all_by(Image, product_id=product.id)
            ]
            removed = self.repository.delete_where(Image, "product_id", product.id)
            self.repository.delete(product)
        except StoreError as e:
            raise from_store_error(e) from e

        if orphaned_keys:
            logger.error(
                "Product %d deleted with %d image records; orphaned blobs: %s",
                product_id,
                removed,
                orphaned_keys,
            )
        logger.info("Account %d deleted product %d", principal.id, product_id)
        return Outcome.no_content()
