# app/routes/__init__.py
from fastapi import APIRouter
from app.routes.itineraries import itinerary_routes
from app.routes.expense import expense
from app.routes.checklist import checklist


api_router = APIRouter()

# Itinerary routes
api_router.include_router(itinerary_routes.router)

# Expense routes
api_router.include_router(expense.router)

# Pre-trip checklist routes
api_router.include_router(checklist.router)
