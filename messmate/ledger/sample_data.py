"""Sample ledger for guest sessions, laid out around the current month."""

from datetime import date

from messmate.core.period import Period
from messmate.ledger.records import RecordKind

SAMPLE_RESIDENTS = [
    ("sample-resident-1", "Rahim Uddin"),
    ("sample-resident-2", "Karim Hasan"),
    ("sample-resident-3", "Sadia Akter"),
]

# Meals per day by resident, cycled over the days logged so far
MEAL_PATTERNS = {
    "sample-resident-1": [2, 3, 2, 2, 3],
    "sample-resident-2": [3, 2, 0, 3, 2],
    "sample-resident-3": [1, 2, 2, 0, 2],
}

SAMPLE_MARKET = [
    ("sample-resident-1", 1, 1250.0, "Rice, lentils and oil"),
    ("sample-resident-2", 4, 860.0, "Vegetables and fish"),
    ("sample-resident-3", 8, 540.0, "Eggs and spices"),
    ("sample-resident-1", 12, 975.0, "Chicken and onions"),
]

SAMPLE_BILLS = [
    ("House rent", 18000.0, 1),
    ("Electricity", 1450.0, 5),
    ("Cook salary", 4000.0, 7),
]


def sample_collections(tenant_id: str, today: date | None = None) -> dict[RecordKind, list[dict]]:
    """
    Build raw guest records for the month containing ``today``.

    Meals are logged up to today; market and bill entries dated after today
    are skipped, so a guest opening the app on the 3rd sees a 3-day ledger.

    Args:
        tenant_id: Guest sentinel tenant id stamped on every record
        today: Reference date (default: today)

    Returns:
        Raw field dicts per collection, ready for model validation
    """
    today = today or date.today()
    period = Period.containing(today)
    logged_days = [day for day in period.days() if day <= today]

    residents = [
        {"id": resident_id, "name": name, "join_date": period.start, "tenant_id": tenant_id}
        for resident_id, name in SAMPLE_RESIDENTS
    ]

    meals = []
    for resident_id, pattern in MEAL_PATTERNS.items():
        for index, day in enumerate(logged_days):
            count = pattern[index % len(pattern)]
            if count > 0:
                meals.append(
                    {
                        "id": f"sample-meal-{resident_id[-1]}-{day.day}",
                        "resident_id": resident_id,
                        "date": day,
                        "meal_count": count,
                        "tenant_id": tenant_id,
                    }
                )

    market = [
        {
            "id": f"sample-market-{index}",
            "resident_id": resident_id,
            "date": period.day(day),
            "amount": amount,
            "description": description,
            "tenant_id": tenant_id,
        }
        for index, (resident_id, day, amount, description) in enumerate(SAMPLE_MARKET, start=1)
        if day <= today.day
    ]

    bills = [
        {
            "id": f"sample-bill-{index}",
            "name": name,
            "amount": amount,
            "date": period.day(day),
            "tenant_id": tenant_id,
        }
        for index, (name, amount, day) in enumerate(SAMPLE_BILLS, start=1)
        if day <= today.day
    ]

    return {
        RecordKind.RESIDENTS: residents,
        RecordKind.MEALS: meals,
        RecordKind.MARKET: market,
        RecordKind.BILLS: bills,
    }
