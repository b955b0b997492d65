# app/services/seller_service.py
import logging
from datetime import datetime, timezone

from sqlmodel import Session

from app.core.errors import NotFound, UpstreamFailure, ValidationError
from app.core.storage_utils import image_extension, upload_to_storage
from app.models.seller import Seller
from app.repositories.product_repo import ProductRepository
from app.repositories.seller_repo import SellerRepository
from app.schemas.seller import SellerCardPayload

logger = logging.getLogger(__name__)

REQUIRED_CARD_FIELDS = ("color", "description", "genre", "image", "text_color", "title")


class SellerService:
    """
    Business logic for seller cards.

    Responsibilities:
      - validate and upsert a seller card
      - keep Product.seller / Product.genre equal to the card's title / genre
      - cascade product deletion when a card (or its owner) goes away

    Card writes and the product propagation commit in one transaction.
    """

    def __init__(self, seller_repo: SellerRepository, product_repo: ProductRepository):
        self.seller_repo = seller_repo
        self.product_repo = product_repo

    # ----- Reads -----

    def get_card(self, session: Session, seller_id: str) -> Seller:
        seller = self.seller_repo.get_by_id(session, seller_id)
        if not seller:
            raise NotFound("Seller card not found")
        return seller

    def list_sellers(self, session: Session, skip: int = 0, limit: int = 50) -> list[Seller]:
        return self.seller_repo.list_sellers(session, skip=skip, limit=limit)

    # ----- Upsert -----

    def upsert_card(
        self,
        session: Session,
        user_id: str,
        payload: SellerCardPayload,
    ) -> tuple[Seller, bool, int]:
        """
        Create or update the caller's seller card.

        Returns:
            (seller, created, products_updated)

        Raises:
            ValidationError: listing every missing required field.
        """
        fields = payload.model_dump()
        missing = [
            name
            for name in REQUIRED_CARD_FIELDS
            if fields.get(name) is None or not str(fields[name]).strip()
        ]
        if missing:
            raise ValidationError(
                "Missing required fields", details=", ".join(missing)
            )

        values = {name: fields[name] for name in REQUIRED_CARD_FIELDS}
        seller = self.seller_repo.get_for_update(session, user_id)

        if seller is None:
            seller = Seller(id=user_id, user_id=user_id, **values)
            self.seller_repo.add(session, seller)
            session.commit()
            session.refresh(seller)
            logger.info("Seller card created for %s", user_id)
            return seller, True, 0

        for name, value in values.items():
            setattr(seller, name, value)
        seller.updated_at = datetime.now(timezone.utc)
        self.seller_repo.add(session, seller)

        updated = self.product_repo.set_seller_profile(
            session, user_id, seller_name=seller.title, genre=seller.genre
        )
        session.commit()
        session.refresh(seller)
        logger.info(
            "Seller card %s updated, %d product(s) refreshed", user_id, updated
        )
        return seller, False, updated

    def set_card_image(
        self,
        session: Session,
        user_id: str,
        content_type: str,
        file_bytes: bytes,
    ) -> Seller:
        """
        Upload a new card image and store its path on the card.

        Path pattern:
            sellers/<user_id>/card.<ext>
        """
        seller = self.get_card(session, user_id)
        try:
            ext = image_extension(content_type, file_bytes)
        except ValueError as e:
            raise ValidationError(str(e))

        try:
            seller.image = upload_to_storage(
                f"sellers/{user_id}/card.{ext}", file_bytes, content_type
            )
        except Exception as e:
            logger.error("Card image upload failed for %s: %s", user_id, e)
            raise UpstreamFailure("Failed to upload image", details=str(e))
        seller.updated_at = datetime.now(timezone.utc)
        self.seller_repo.add(session, seller)
        session.commit()
        session.refresh(seller)
        return seller

    # ----- Deletes -----

    def delete_card(self, session: Session, user_id: str) -> int:
        """
        Delete every product of the seller, then the card, in one commit.

        Returns the number of products removed.
        """
        seller = self.seller_repo.get_for_update(session, user_id)
        if seller is None:
            raise NotFound("Seller card not found")

        removed = self._cascade(session, seller)
        session.commit()
        return removed

    def on_user_deleted(self, session: Session, user_id: str) -> bool:
        """
        Cascade for account deletion: drop the card and its products if the
        user has one. Does not commit; the caller commits together with the
        user row removal.

        Returns True when a card was removed.
        """
        seller = self.seller_repo.get_for_update(session, user_id)
        if seller is None:
            return False
        self._cascade(session, seller)
        return True

    def _cascade(self, session: Session, seller: Seller) -> int:
        # Products first, the card never disappears ahead of them
        removed = self.product_repo.delete_for_seller(session, seller.id)
        self.seller_repo.delete(session, seller)
        logger.info("Seller %s removed with %d product(s)", seller.id, removed)
        return removed
