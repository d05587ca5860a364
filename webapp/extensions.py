import logging
from dataclasses import dataclass

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

logger = logging.getLogger(__name__)

db = SQLAlchemy()
migrate = Migrate()

SERVICES_KEY = "webapp.services"


@dataclass
class Services:
    """Collaborator handles and orchestrators for one application."""

    repository: object
    blob_store: object
    hasher: object
    notifier: object
    verification_store: object
    authorizer: object
    accounts: object
    products: object
    images: object


def init_services(app, **overrides):
    """Build the collaborators once per app and wire the orchestrators.

    Any collaborator may be replaced through ``overrides`` (tests pass fakes).
    """
    from webapp.services.repository import Repository
    from webapp.services.storage_service import S3BlobStore
    from webapp.services.security import CredentialHasher
    from webapp.services.notification_service import build_notifier
    from webapp.services.verification_service import build_verification_store
    from webapp.services.auth_service import Authorizer
    from webapp.services.account_service import AccountService
    from webapp.services.product_service import ProductService
    from webapp.services.image_service import ImageService

    repository = overrides.get("repository") or Repository(db.session)
    blob_store = overrides.get("blob_store") or S3BlobStore.from_config(app.config)
    hasher = overrides.get("hasher") or CredentialHasher.from_config(app.config)
    notifier = overrides.get("notifier") or build_notifier(app.config)
    verification_store = overrides.get(
        "verification_store"
    ) or build_verification_store(app.config)

    authorizer = Authorizer(repository, hasher)
    services = Services(
        repository=repository,
        blob_store=blob_store,
        hasher=hasher,
        notifier=notifier,
        verification_store=verification_store,
        authorizer=authorizer,
        accounts=AccountService(repository, hasher, notifier, authorizer),
        products=ProductService(repository, authorizer),
        images=ImageService(repository, blob_store, authorizer),
    )
    app.extensions[SERVICES_KEY] = services
    logger.debug("Services initialized: blob store %s", type(blob_store).__name__)
    return services


def get_services():
    return current_app.extensions[SERVICES_KEY]
