from typing import Any

from pydantic import BaseModel


class CatalogResponse(BaseModel):
    data: Any = None
    error: str | None = None
