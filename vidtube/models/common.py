"""
Shared response models

Services speak snake_case; every response is serialized with camelCase
aliases (``likeCount``, ``viewerHasLiked``, ``totalPages``...).
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelModel(BaseModel):
    """Base schema that accepts snake_case and serializes camelCase"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class OwnerProfile(CamelModel):
    """Public projection of a content owner"""
    id: str
    username: str
    full_name: str
    avatar: Optional[str] = None
    # Only present on video detail
    subscribers_count: Optional[int] = None
    viewer_is_subscribed: Optional[bool] = None


class Pagination(CamelModel):
    """Pagination block returned with every listing"""
    total_items: int
    total_pages: int
    current_page: int
    page_size: int
    has_next_page: bool
    has_previous_page: bool


class DeletedResponse(CamelModel):
    """Acknowledgement of a delete"""
    success: bool = True
    id: str
