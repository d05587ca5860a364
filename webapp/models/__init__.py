from webapp.models.account import Account
from webapp.models.product import Product
from webapp.models.image import Image
from webapp.models.health_check import HealthCheck

__all__ = ["Account", "Product", "Image", "HealthCheck"]
