from typing import Final

WEEKDAYS: Final[tuple[str, ...]] = ("月", "火", "水", "木", "金", "土", "日")
MONTHLY_SLOT: Final[str] = "monthly"

# Every weekday is counted as occurring exactly four times per month.
WEEKS_PER_MONTH: Final[int] = 4

PER_OCCURRENCE: Final[str] = "per_occurrence"
MONTHLY_FLAT: Final[str] = "monthly_flat"
RECURRENCE_KINDS: Final[tuple[str, ...]] = (PER_OCCURRENCE, MONTHLY_FLAT)

DEFAULT_UNIT_PRICE: Final[int] = 10
DEFAULT_CO_PAY_RATIO: Final[str] = "0.1"
DEFAULT_CARE_LEVEL: Final[int] = 3

CARE_LEVELS: Final[list[dict]] = [
    {"level": 1, "name": "要介護1", "max_units": 16765},
    {"level": 2, "name": "要介護2", "max_units": 19705},
    {"level": 3, "name": "要介護3", "max_units": 27048},
    {"level": 4, "name": "要介護4", "max_units": 30938},
    {"level": 5, "name": "要介護5", "max_units": 36217},
]

SERVICE_DEFINITIONS: Final[list[dict]] = [
    {"id": "day_service_7", "name": "デイサービス (7-8時間)", "units_per_occurrence": 750,
     "category": "day", "icon": "☀️", "recurrence": PER_OCCURRENCE},
    {"id": "day_service_5", "name": "デイサービス (5-6時間)", "units_per_occurrence": 580,
     "category": "day", "icon": "⛅", "recurrence": PER_OCCURRENCE},
    {"id": "helper_life", "name": "訪問介護 (生活援助45分)", "units_per_occurrence": 183,
     "category": "visit", "icon": "🏠", "recurrence": PER_OCCURRENCE},
    {"id": "helper_body", "name": "訪問介護 (身体介護30分)", "units_per_occurrence": 250,
     "category": "visit", "icon": "🛁", "recurrence": PER_OCCURRENCE},
    {"id": "nurse", "name": "訪問看護 (30分未満)", "units_per_occurrence": 469,
     "category": "medical", "icon": "💉", "recurrence": PER_OCCURRENCE},
    {"id": "rental_bed", "name": "福祉用具 (特殊寝台)", "units_per_occurrence": 1200,
     "category": "rental", "icon": "🛏️", "recurrence": MONTHLY_FLAT},
    {"id": "rental_wheelchair", "name": "福祉用具 (車椅子)", "units_per_occurrence": 600,
     "category": "rental", "icon": "🦽", "recurrence": MONTHLY_FLAT},
]
