# Seed rows for the expense tracker and the pre-trip checklist.

INITIAL_EXPENSES = [
    {"id": "1", "title": "AREX 機場快線", "date": "2026-03-24", "payment_method": "信用卡",
     "amount": 13000, "currency": "KRW", "tax_refund": "無"},
    {"id": "2", "title": "豬肉湯飯午餐", "date": "2026-03-24", "payment_method": "現金",
     "amount": 25000, "currency": "KRW", "tax_refund": "無"},
    {"id": "3", "title": "咖啡", "date": "2026-03-24", "payment_method": "行動支付",
     "amount": 12000, "currency": "KRW", "tax_refund": "無"},
    {"id": "4", "title": "行前保險", "date": "2026-03-20", "payment_method": "信用卡",
     "amount": 1200, "currency": "TWD", "tax_refund": "無"},
    {"id": "5", "title": "Olive Young 採買", "date": "2026-03-25", "payment_method": "信用卡",
     "amount": 150000, "currency": "KRW", "tax_refund": "已退稅"},
]

INITIAL_CHECKLIST = {
    "todo": [
        {"id": "todo-1", "text": "Check passport expiry"},
        {"id": "todo-2", "text": "Buy travel insurance"},
        {"id": "todo-3", "text": "Exchange currency"},
    ],
    "packing": [
        {"id": "packing-1", "text": "Passport", "category": "文件"},
        {"id": "packing-2", "text": "Phone charger", "category": "3C產品"},
        {"id": "packing-3", "text": "Universal adapter", "category": "3C產品"},
    ],
}
