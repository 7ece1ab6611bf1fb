from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base for payloads exchanged with the browser; fields travel as camelCase"""

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class MessageResponse(APIModel):
    success: bool = True
    message: str


class ErrorResponse(APIModel):
    success: bool = False
    message: str
    error: Optional[str] = None
