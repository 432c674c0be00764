from pydantic import BaseModel
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """{"message": ..., "data": ...} wrapper used by every JSON endpoint."""
    message: Optional[str] = None
    data: T
