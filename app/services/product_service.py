# app/services/product_service.py
import logging

from sqlmodel import Session

from app.core.auth import CallerIdentity
from app.core.errors import (
    Forbidden,
    InvalidState,
    NotFound,
    UpstreamFailure,
    ValidationError,
)
from app.core.storage_utils import (
    generate_filename,
    image_extension,
    upload_to_storage,
)
from app.models.product import Product
from app.repositories.product_repo import ProductRepository
from app.repositories.seller_repo import SellerRepository
from app.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic for Product.

    Responsibilities:
      - copy seller title/genre onto new products
      - owner-or-admin checks for edits
      - image upload orchestration with the blob store
    """

    def __init__(self, repo: ProductRepository, seller_repo: SellerRepository):
        self.repo = repo
        self.seller_repo = seller_repo

    # ----- Helpers -----

    @staticmethod
    def _ensure_owner(identity: CallerIdentity, product: Product) -> None:
        if product.seller_id != identity.uid and not identity.is_admin:
            raise Forbidden("Product belongs to another seller")

    # ----- Products -----

    def list_products(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
        seller_id: str | None = None,
        genre: str | None = None,
    ) -> list[Product]:
        return self.repo.list_products(
            session, skip=skip, limit=limit, seller_id=seller_id, genre=genre
        )

    def get_product(self, session: Session, product_id: str) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    def create_product(
        self,
        session: Session,
        identity: CallerIdentity,
        payload: ProductCreate,
    ) -> Product:
        """
        List a new product for the calling seller.

        The seller needs a card first: display name and genre come from it.
        """
        seller = self.seller_repo.get_by_id(session, identity.uid)
        if seller is None:
            raise InvalidState("Create a seller card before listing products")

        product = Product(
            **payload.model_dump(),
            seller=seller.title,
            seller_id=seller.id,
            genre=seller.genre,
        )
        return self.repo.create(session, product)

    def update_product(
        self,
        session: Session,
        identity: CallerIdentity,
        product_id: str,
        payload: ProductUpdate,
    ) -> Product:
        """
        Partial update of a product. Only fields that were sent change;
        an explicit `"stock": null` switches stock tracking off.
        """
        product = self.get_product(session, product_id)
        self._ensure_owner(identity, product)

        for name, value in payload.model_dump(exclude_unset=True).items():
            if value is None and name != "stock":
                continue
            setattr(product, name, value)

        return self.repo.update(session, product)

    def delete_product(
        self,
        session: Session,
        identity: CallerIdentity,
        product_id: str,
    ) -> None:
        product = self.get_product(session, product_id)
        self._ensure_owner(identity, product)
        self.repo.delete(session, product)

    # ----- Image -----

    def set_image(
        self,
        session: Session,
        identity: CallerIdentity,
        product_id: str,
        content_type: str,
        file_bytes: bytes,
    ) -> Product:
        """
        Upload a product image and keep its storage path on the product.

        Path pattern:
            products/<product_id>/<uuid>.<ext>
        """
        product = self.get_product(session, product_id)
        self._ensure_owner(identity, product)
        try:
            ext = image_extension(content_type, file_bytes)
        except ValueError as e:
            raise ValidationError(str(e))

        path = f"products/{product.id}/{generate_filename(ext)}"
        try:
            product.image = upload_to_storage(path, file_bytes, content_type)
        except Exception as e:
            logger.error("Image upload failed for product %s: %s", product.id, e)
            raise UpstreamFailure("Failed to upload image", details=str(e))
        return self.repo.update(session, product)
