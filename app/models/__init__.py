from .itinerary.itinerary_item import ItineraryItemRecord
from .expense.expense_models import Expense
from .checklist.checklist_models import ChecklistItem
