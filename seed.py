import asyncio
import logging
import sys

from sqlmodel import SQLModel

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.seed import SeedDevDataUseCase
from src.depends import AsyncSessionLocal, engine, get_identity_provider, get_payment_gateway

logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)
logger = logging.getLogger("seed")


async def seed() -> int:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSessionLocal() as session:
        use_case = SeedDevDataUseCase(
            SqlAlchemyUnitOfWork(session), get_identity_provider(), get_payment_gateway()
        )
        result = await use_case.execute()

    await engine.dispose()

    if result.is_err():
        logger.error(f"Seed process failed: {result.error.message}")
        return 1

    logger.info(f"Seed process finished: {result.value.model_dump()}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(seed()))
