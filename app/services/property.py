"""
Property service for managing listings and their image assets.
Handles validation, price normalization, and keeping stored images consistent with records.
"""

from typing import Optional, List, Dict, Any, Tuple
from decimal import Decimal
from fastapi import BackgroundTasks, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from app.repositories.property import PropertyRepository
from app.models.property import Property, DEFAULT_PROPERTY_TYPE, PRICE_SCALE, ETH_SCALE
from app.services.assets import AssetStore
from app.utils.validators import ValidationUtils
from app.utils.exceptions import NotFoundError, ValidationError
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for the listing lifecycle.
    Images go through the AssetStore; the service never touches files directly.
    """

    REQUIRED_FIELDS = ("title", "price", "ethPrice", "address", "description")
    TEXT_FIELDS = {
        "title": "title",
        "type": "property_type",
        "address": "address",
        "description": "description",
    }
    # public name -> (column, decimal places stored)
    AMOUNT_FIELDS = {
        "price": ("price", PRICE_SCALE),
        "ethPrice": ("eth_price", ETH_SCALE),
    }

    def __init__(self, db_session: AsyncSession, assets: AssetStore):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.assets = assets

    async def list_properties(self) -> List[Property]:
        """All properties, newest first."""
        return await self.property_repo.list_newest_first()

    async def get_property(self, property_id: int) -> Property:
        """
        Raises:
            NotFoundError: If property doesn't exist
        """
        property_obj = await self.property_repo.get_by_id(property_id)
        if property_obj is None:
            raise NotFoundError("Property", property_id)
        return property_obj

    async def create_property(self, fields: Dict[str, Any], image: Optional[UploadFile] = None) -> Property:
        """
        Create a new property listing.

        Args:
            fields: Submitted values keyed by public field name
                    (title, type, price, ethPrice, address, description)
            image: Optional uploaded image

        Returns:
            Created property

        Raises:
            ValidationError: Listing every missing and invalid field
            UnsupportedMediaError: If the image is not an accepted image
            PayloadTooLargeError: If the image is too large
        """
        missing = ValidationUtils.missing_fields(fields, self.REQUIRED_FIELDS)
        amounts, invalid = self._normalize_amounts(fields, skip=missing)

        if missing or invalid:
            raise self._validation_error(missing, invalid)

        create_data: Dict[str, Any] = {
            column: ValidationUtils.clean_text(fields.get(name))
            for name, column in self.TEXT_FIELDS.items()
        }
        create_data["property_type"] = create_data["property_type"] or DEFAULT_PROPERTY_TYPE
        create_data.update(amounts)
        create_data["image"] = await self.assets.store(image) if image is not None else None

        try:
            property_obj = await self.property_repo.create(create_data)
        except Exception:
            await self._discard_asset(create_data["image"])
            raise

        logger.info(f"Property created: {property_obj.title} (ID: {property_obj.id})")
        return property_obj

    async def update_property(
        self,
        property_id: int,
        fields: Dict[str, Any],
        image: Optional[UploadFile] = None,
        background_tasks: Optional[BackgroundTasks] = None
    ) -> Property:
        """
        Partially update a property. Blank or omitted fields keep their stored values.

        When a new image is supplied it replaces the stored reference and the previous
        locally owned file is removed after the update has been committed. With
        background_tasks the removal runs after the response has been sent.

        Raises:
            NotFoundError: If property doesn't exist
            ValidationError: If a supplied price is invalid
        """
        existing = await self.get_property(property_id)

        supplied = [name for name in self.AMOUNT_FIELDS if not ValidationUtils.is_blank(fields.get(name))]
        amounts, invalid = self._normalize_amounts(
            fields, skip=[name for name in self.AMOUNT_FIELDS if name not in supplied]
        )
        if invalid:
            raise self._validation_error([], invalid)

        update_data: Dict[str, Any] = {}
        for name, column in self.TEXT_FIELDS.items():
            value = ValidationUtils.clean_text(fields.get(name))
            if value is not None:
                update_data[column] = value
        update_data.update(amounts)

        previous_image = existing.image
        if image is not None:
            update_data["image"] = await self.assets.store(image)

        try:
            updated = await self.property_repo.update(existing, update_data)
        except Exception:
            await self._discard_asset(update_data.get("image"))
            raise

        logger.info(f"Property updated: {property_id} (fields: {', '.join(sorted(update_data)) or 'none'})")

        if image is not None and previous_image != updated.image:
            await self._release_asset(previous_image, background_tasks)

        return updated

    async def delete_property(self, property_id: int, background_tasks: Optional[BackgroundTasks] = None) -> None:
        """
        Delete a property and, best-effort, its locally stored image.

        Raises:
            NotFoundError: If property doesn't exist
        """
        existing = await self.get_property(property_id)
        image = existing.image

        if not await self.property_repo.delete(property_id):
            raise NotFoundError("Property", property_id)

        logger.info(f"Property deleted: {property_id}")
        await self._release_asset(image, background_tasks)

    def _normalize_amounts(self, fields: Dict[str, Any], skip: List[str]) -> Tuple[Dict[str, Decimal], List[str]]:
        """Normalize price fields not listed in skip; returns (column values, invalid field names)."""
        amounts: Dict[str, Decimal] = {}
        invalid: List[str] = []
        for name, (column, scale) in self.AMOUNT_FIELDS.items():
            if name in skip:
                continue
            amount = ValidationUtils.normalize_amount(fields.get(name), scale=scale)
            if amount is None:
                invalid.append(name)
            else:
                amounts[column] = amount
        return amounts, invalid

    @staticmethod
    def _validation_error(missing: List[str], invalid: List[str]) -> ValidationError:
        problems = []
        if missing:
            problems.append(f"Required fields missing: {', '.join(missing)}")
        if invalid:
            problems.append(f"Must be a valid number greater than 0: {', '.join(invalid)}")
        return ValidationError("; ".join(problems), missing=missing, invalid=invalid)

    async def _release_asset(self, ref: Optional[str], background_tasks: Optional[BackgroundTasks]) -> None:
        """Discard an asset that no committed record references any more."""
        if background_tasks is not None:
            background_tasks.add_task(self._discard_asset, ref)
        else:
            await self._discard_asset(ref)

    async def _discard_asset(self, ref: Optional[str]) -> None:
        """Remove an owned asset; failures are logged and never propagate."""
        if not self.assets.is_owned(ref):
            return
        try:
            await self.assets.delete(ref)
        except Exception as e:
            logger.warning(f"Failed to delete image asset {ref}: {e}", exc_info=True)
