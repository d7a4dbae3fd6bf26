from app.core.database import engine, Base
import app.models  # noqa: F401  registers every table on Base.metadata


async def init_db(bind=engine):
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
