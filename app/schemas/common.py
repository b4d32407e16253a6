# app/schemas/common.py
import math

from pydantic import BaseModel


class Pagination(BaseModel):
    """Page metadata for 1-indexed listings"""
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
        )
