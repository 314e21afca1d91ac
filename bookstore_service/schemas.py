from typing import Optional

from pydantic import BaseModel, Field


class Book(BaseModel):
    title: str
    author: str
    genre: str
    published_year: int = Field(ge=0, description="Four-digit year of first publication")
    price: float = Field(ge=0)
    in_stock: bool = True
    pages: Optional[int] = Field(default=None, ge=1)
    publisher: Optional[str] = None

    def to_document(self) -> dict:
        """Document ready for ``insert_one``; unset optional fields are left out."""
        return self.model_dump(exclude_none=True)
