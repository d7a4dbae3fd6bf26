from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.database import SessionLocal
from app.core.init_db import init_db
from app.core.logger import logger
from app.core.redis_lifecyle import close_redis
from app.dependencies.itinerary import get_item_store
from app.routes import api_router
from app.services.checklist.checklist_service import seed_checklist_if_empty
from app.services.expense.expense_service import seed_expenses_if_empty
from app.services.itineraries.seed import seed_itinerary_if_empty

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.PROJECT_DESCRIPTION,
    openapi_url=f"/openapi.json"
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include all API routes
app.include_router(api_router)

@app.get("/")
async def root():
    return {"message": "Welcome to the Seoul Trip Planner API"}

@app.get("/health")
async def health_check():
    return {"status": "healthy", "item_store": settings.ITEM_STORE_BACKEND}

@app.on_event("startup")
async def startup_event():
    await init_db()
    store = await get_item_store()
    if settings.SEED_ON_STARTUP:
        await seed_itinerary_if_empty(store)
        async with SessionLocal() as session:
            await seed_expenses_if_empty(session)
            await seed_checklist_if_empty(session)
    logger.info(f"Startup complete, item store backend: {settings.ITEM_STORE_BACKEND}")

@app.on_event("shutdown")
async def shutdown_event():
    await close_redis()
