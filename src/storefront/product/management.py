"""Product catalog management — commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    """List a new product in the catalog."""

    name = String(required=True, max_length=255)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=100)
    stock = Integer(default=0, min_value=0)
    image = String(max_length=500)


@storefront.command(part_of="Product")
class UpdateProduct:
    """Edit a listing. Omitted fields keep their current values."""

    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price = Float(min_value=0.0)
    category = String(max_length=100)
    stock = Integer(min_value=0)
    image = String(max_length=500)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            stock=command.stock,
            image=command.image,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), category=product.category)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            stock=command.stock,
            image=command.image,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("Product deleted", product_id=str(command.product_id))
