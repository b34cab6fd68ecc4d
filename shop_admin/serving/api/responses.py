"""
Response models shared by several routers.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from shop_admin.notifications import Notice


class ActionResponse(BaseModel):
    """Result of a write action"""
    id: Optional[str] = None
    notices: List[Notice] = Field(default_factory=list)


class DocumentListResponse(BaseModel):
    """Unpaginated list of raw documents"""
    items: List[Dict[str, Any]]
    total: int


class NameInput(BaseModel):
    """Body of forms with a single name field"""
    name: str = Field(..., min_length=1)
