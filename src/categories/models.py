"""Category data models."""

from typing import Optional, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class Category(BaseModel):
    """Category model."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    color: str
    icon: str
    owner_id: str = Field(alias="ownerId")
    created_at: str = Field(alias="createdAt")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Category":
        """Build a category from a stored DynamoDB item."""
        return cls(
            id=item['category_id'],
            name=item['name'],
            color=item['color'],
            icon=item['icon'],
            owner_id=item['user_id'],
            created_at=item['created_at'],
            updated_at=item.get('updated_at')
        )
