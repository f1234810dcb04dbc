"""
Seed Use Case DTOs (Data Transfer Objects)
"""

from typing import List

from pydantic import BaseModel


class SeedResponse(BaseModel):
    """Ids of everything the seed created"""

    user_id: str
    team_id: int
    product_ids: List[str]
