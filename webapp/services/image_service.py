"""Image lifecycle across the relational store and the blob store.

There is no transaction spanning both systems, so every write runs in a
fixed order with the cheaper-to-reclaim side first:

- create uploads the blob before inserting the record. A failed upload
  leaves nothing behind; a failed insert leaves an orphaned blob, which
  is logged and left for the reconciliation sweep.
- delete removes the blob before the record. A failed blob delete leaves
  the record untouched; a failed record delete leaves a record pointing at
  a deleted blob, which is logged.
"""
import logging
import uuid

from werkzeug.utils import secure_filename

from webapp.errors import (
    BlobStoreError,
    NotFound,
    StoreError,
    StoreUnavailable,
    from_store_error,
)
from webapp.models.image import Image
from webapp.models.product import Product
from webapp.responses import Outcome, serialize_image
from webapp.services import validation

logger = logging.getLogger(__name__)


def blob_key(owner_id, product_id, filename):
    """``<owner>/<product>/<uuid>-<filename>``: unique and traceable to its owner."""
    safe_name = secure_filename(filename) or "upload"
    return f"{owner_id}/{product_id}/{uuid.uuid4()}-{safe_name}"


class ImageService:
    def __init__(self, repository, blob_store, authorizer):
        self.repository = repository
        self.blob_store = blob_store
        self.authorizer = authorizer

    def _fetch_product(self, product_id):
        try:
            product = self.repository.find(Product, product_id)
        except StoreError as e:
            raise from_store_error(e) from e
        if product is None:
            raise NotFound(f"product {product_id}")
        return product

    def _fetch_image(self, product_id, image_id):
        """Images resolve only through the product they belong to."""
        try:
            image = self.repository.find_by(
                Image, image_id=image_id, product_id=product_id
            )
        except StoreError as e:
            raise from_store_error(e) from e
        if image is None:
            raise NotFound(f"image {image_id} of product {product_id}")
        return image

    def create(self, req, raw_product_id):
        principal = self.authorizer.authenticate(req.credentials)
        product_id = validation.parse_id(raw_product_id)
        upload = validation.validate_upload(req)

        product = self._fetch_product(product_id)
        self.authorizer.require_owner(principal, product)

        key = blob_key(principal.id, product.id, upload.filename)
        try:
            self.blob_store.put(key, upload.data, upload.content_type)
        except BlobStoreError as e:
            logger.error("Upload of %s failed, no image record created", key)
            raise StoreUnavailable(str(e)) from e

        try:
            image = self.repository.create(
                Image(
                    product_id=product.id,
                    file_name=upload.filename,
                    s3_bucket_path=key,
                )
            )
        except StoreError as e:
            logger.error(
                "Image record insert failed after upload; orphaned blob %s", key
            )
            raise from_store_error(e) from e

        logger.info("Stored image %d for product %d at %s", image.image_id, product.id, key)
        return Outcome.created(serialize_image(image))

    def get(self, req, raw_product_id, raw_image_id):
        product_id = validation.parse_id(raw_product_id)
        image_id = validation.parse_id(raw_image_id)
        validation.check_read(req)
        return Outcome.ok(serialize_image(self._fetch_image(product_id, image_id)))

    def list(self, req, raw_product_id):
        product_id = validation.parse_id(raw_product_id)
        validation.check_read(req)
        product = self._fetch_product(product_id)
        try:
            images = self.repository.find_all_by(Image, product_id=product.id)
        except StoreError as e:
            raise from_store_error(e) from e
        return Outcome.ok([serialize_image(image) for image in images])

    def delete(self, req, raw_product_id, raw_image_id):
        principal = self.authorizer.authenticate(req.credentials)
        product_id = validation.parse_id(raw_product_id)
        image_id = validation.parse_id(raw_image_id)
        validation.check_read(req, anonymous=False)

        product = self._fetch_product(product_id)
        self.authorizer.require_owner(principal, product)
        image = self._fetch_image(product.id, image_id)
        key = image.s3_bucket_path

        try:
            self.blob_store.delete(key)
        except BlobStoreError as e:
            logger.error("Blob delete of %s failed, image record %d kept", key, image_id)
            raise StoreUnavailable(str(e)) from e

        try:
            self.repository.delete(image)
        except StoreError as e:
            logger.error(
                "Image record %d delete failed after its blob %s was removed",
                image_id,
                key,
            )
            raise StoreUnavailable(str(e)) from e

        logger.info("Deleted image %d of product %d", image_id, product_id)
        return Outcome.no_content()
