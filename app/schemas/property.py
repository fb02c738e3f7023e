"""
Pydantic schemas for property responses.
Property input arrives as multipart form fields and is validated by the service.
"""

from pydantic import BaseModel, Field
from typing import Optional, List


class PropertyResponse(BaseModel):
    """Property as returned to clients, with the image materialized into a URL."""

    id: int = Field(..., description="Property ID", example=1)
    title: str = Field(..., description="Listing title", example="Modern Villa")
    property_type: str = Field(..., alias="type", description="Property type", example="house")
    price: float = Field(..., description="Price in local currency", example=1234.56)
    eth_price: float = Field(..., alias="ethPrice", description="Price in ETH", example=0.5)
    address: str = Field(..., description="Property address", example="Jl. Sudirman 1, Jakarta")
    description: str = Field(..., description="Listing description")
    image: Optional[str] = Field(
        None,
        description="Absolute image URL",
        example="http://localhost:5001/uploads/image-1700000000000-3f2a9c1b7d4e.jpg"
    )

    model_config = {"populate_by_name": True}


class PropertyListResponse(BaseModel):
    success: bool = True
    data: List[PropertyResponse]


class PropertyDetailResponse(BaseModel):
    success: bool = True
    message: str
    data: PropertyResponse
