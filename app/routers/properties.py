"""
Property management API endpoints.
Create and update accept multipart form data with an optional image file.
"""

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Path, UploadFile, status
from typing import Optional

from app.context import ServiceContext
from app.models.property import Property
from app.services.property import PropertyService
from app.schemas.common import MessageResponse
from app.schemas.property import (
    PropertyResponse,
    PropertyListResponse,
    PropertyDetailResponse
)
from app.utils.auth import TokenSubject
from app.utils.dependencies import (
    get_context,
    get_current_admin,
    get_property_service,
    get_request_origin
)


router = APIRouter(prefix="/properties", tags=["Properties"])


def to_response(property_obj: Property, context: ServiceContext, origin: str) -> PropertyResponse:
    """Build the public representation, turning the stored image reference into a URL."""
    data = property_obj.to_dict()
    data["image"] = context.assets.to_public_url(property_obj.image, origin)
    return PropertyResponse.model_validate(data)


def submitted_image(image: Optional[UploadFile]) -> Optional[UploadFile]:
    """Browsers send an empty file part when no file was chosen."""
    if image is None or not image.filename:
        return None
    return image


@router.get(
    "",
    response_model=PropertyListResponse,
    status_code=status.HTTP_200_OK,
    summary="List properties",
    description="All properties, newest first"
)
async def list_properties(
    property_service: PropertyService = Depends(get_property_service),
    context: ServiceContext = Depends(get_context),
    origin: str = Depends(get_request_origin)
) -> PropertyListResponse:
    properties = await property_service.list_properties()
    return PropertyListResponse(data=[to_response(p, context, origin) for p in properties])


@router.post(
    "",
    response_model=PropertyDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="Create a property listing. Requires authentication."
)
async def create_property(
    title: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    ethPrice: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    current_admin: TokenSubject = Depends(get_current_admin),
    property_service: PropertyService = Depends(get_property_service),
    context: ServiceContext = Depends(get_context),
    origin: str = Depends(get_request_origin)
) -> PropertyDetailResponse:
    """
    Create a new property listing.

    Raises:
        ValidationError: Listing every missing or invalid field
        UnsupportedMediaError: If the image is not an accepted image
        PayloadTooLargeError: If the image is larger than the limit
    """
    fields = {
        "title": title,
        "type": type,
        "price": price,
        "ethPrice": ethPrice,
        "address": address,
        "description": description,
    }
    property_obj = await property_service.create_property(fields, submitted_image(image))
    return PropertyDetailResponse(
        message="Property created successfully",
        data=to_response(property_obj, context, origin)
    )


@router.put(
    "/{property_id}",
    response_model=PropertyDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Update property",
    description="Partially update a property; omitted fields keep their values. Requires authentication."
)
async def update_property(
    background_tasks: BackgroundTasks,
    property_id: int = Path(..., description="Property ID"),
    title: Optional[str] = Form(None),
    type: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    ethPrice: Optional[str] = Form(None),
    address: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    current_admin: TokenSubject = Depends(get_current_admin),
    property_service: PropertyService = Depends(get_property_service),
    context: ServiceContext = Depends(get_context),
    origin: str = Depends(get_request_origin)
) -> PropertyDetailResponse:
    """
    Update property details and optionally replace its image.

    Raises:
        NotFoundError: If property doesn't exist
        ValidationError: If a supplied price is invalid
    """
    fields = {
        "title": title,
        "type": type,
        "price": price,
        "ethPrice": ethPrice,
        "address": address,
        "description": description,
    }
    property_obj = await property_service.update_property(
        property_id, fields, submitted_image(image), background_tasks
    )
    return PropertyDetailResponse(
        message="Property updated successfully",
        data=to_response(property_obj, context, origin)
    )


@router.delete(
    "/{property_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete property",
    description="Delete a property and its stored image. Requires authentication."
)
async def delete_property(
    background_tasks: BackgroundTasks,
    property_id: int = Path(..., description="Property ID"),
    current_admin: TokenSubject = Depends(get_current_admin),
    property_service: PropertyService = Depends(get_property_service)
) -> MessageResponse:
    """
    Raises:
        NotFoundError: If property doesn't exist
    """
    await property_service.delete_property(property_id, background_tasks)
    return MessageResponse(message="Property deleted successfully")
