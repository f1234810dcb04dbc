"""
Seed Use Cases

Development data: a signed-up owner with a team, and the subscription plans.
"""

from .dtos import SeedResponse
from .seed_dev_data_use_case import SEED_PLANS, SeedDevDataUseCase

__all__ = ["SeedDevDataUseCase", "SeedResponse", "SEED_PLANS"]
