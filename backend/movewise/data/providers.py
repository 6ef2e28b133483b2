"""Default provider registry and pricing tables.

Plain data; services.quoting.config turns these into typed config objects
and allows a JSON file to replace any section.
"""

# Rate-limit window shared by all default providers (1 hour)
DEFAULT_WINDOW_DURATION_MS = 60 * 60 * 1000

PROVIDERS: list[dict] = [
    {
        "id": "uhaul",
        "display_name": "U-Haul",
        "multiplier": 0.85,  # DIY, usually cheapest
        "rating": 4.2,
        "review_count": 15420,
        "services": ["Self-service moving", "Truck rental", "Moving supplies", "Storage"],
        "special_offers": ["10% off first-time customers", "Free moving supplies kit"],
        "contact": {"phone": "1-800-GO-UHAUL", "website": "uhaul.com"},
        "rate_limit": {"request_limit": 100, "window_duration_ms": DEFAULT_WINDOW_DURATION_MS},
    },
    {
        "id": "budget",
        "display_name": "Budget Truck Rental",
        "multiplier": 0.90,
        "rating": 4.0,
        "review_count": 8930,
        "services": ["Full-service moving", "Packing services", "Storage solutions"],
        "special_offers": ["15% military discount", "Free packing materials"],
        "contact": {"phone": "1-800-BUDGET-TRUCK", "website": "budgettruck.com"},
        "rate_limit": {"request_limit": 50, "window_duration_ms": DEFAULT_WINDOW_DURATION_MS},
    },
    {
        "id": "allied",
        "display_name": "Allied Van Lines",
        "multiplier": 1.15,  # premium
        "rating": 4.7,
        "review_count": 5670,
        "services": ["White-glove service", "Custom crating", "International moves", "Storage"],
        "special_offers": ["Premium service guarantee", "Free storage for 30 days"],
        "contact": {"phone": "1-800-ALLIED-1", "website": "allied.com"},
        "rate_limit": {"request_limit": 75, "window_duration_ms": DEFAULT_WINDOW_DURATION_MS},
    },
    {
        "id": "mayflower",
        "display_name": "Mayflower Transit",
        "multiplier": 1.20,  # premium
        "rating": 4.8,
        "review_count": 7890,
        "services": ["Premium moving", "Corporate relocation", "International", "Storage"],
        "special_offers": ["Corporate discount available", "White-glove service"],
        "contact": {"phone": "1-800-MAYFLOWER", "website": "mayflower.com"},
        "rate_limit": {"request_limit": 60, "window_duration_ms": DEFAULT_WINDOW_DURATION_MS},
    },
    {
        "id": "north_american",
        "display_name": "North American Van Lines",
        "multiplier": 1.10,  # mid-range premium
        "rating": 4.5,
        "review_count": 6540,
        "services": ["Full-service moving", "Packing", "Storage", "Specialty items"],
        "special_offers": ["Senior citizen discount", "Flexible scheduling"],
        "contact": {"phone": "1-800-NORTH-AMERICAN", "website": "northamerican.com"},
        "rate_limit": {"request_limit": 80, "window_duration_ms": DEFAULT_WINDOW_DURATION_MS},
    },
]

# Base price by home size (USD)
HOME_SIZE_PRICES: dict[str, int] = {
    "studio": 800,
    "1-bedroom": 1200,
    "2-bedroom": 1800,
    "3-bedroom": 2500,
    "4-bedroom": 3200,
    "5-bedroom": 4000,
}
DEFAULT_HOME_SIZE_PRICE = 1500

# Crew days by home size, before travel days
HOME_SIZE_DAYS: dict[str, int] = {
    "studio": 1,
    "1-bedroom": 1,
    "2-bedroom": 2,
    "3-bedroom": 2,
    "4-bedroom": 3,
    "5-bedroom": 3,
}
DEFAULT_HOME_SIZE_DAYS = 2

# Surcharges as a fraction of the pre-service subtotal
PERCENT_SURCHARGES: dict[str, float] = {
    "packing": 0.30,
    "unpacking": 0.20,
}

FLAT_SURCHARGES: dict[str, int] = {
    "storage": 200,
    "piano": 300,
    "appliances": 150,
    "fragile-items": 100,
}

SPECIAL_ITEM_FEES: dict[str, int] = {
    "piano": 400,
    "pool-table": 300,
    "hot-tub": 500,
    "artwork": 200,
}
DEFAULT_SPECIAL_ITEM_FEE = 100

# Short forms accepted for home size
HOME_SIZE_ALIASES: dict[str, str] = {
    "1br": "1-bedroom", "1-br": "1-bedroom", "1 bedroom": "1-bedroom", "one bedroom": "1-bedroom",
    "2br": "2-bedroom", "2-br": "2-bedroom", "2 bedroom": "2-bedroom", "two bedroom": "2-bedroom",
    "3br": "3-bedroom", "3-br": "3-bedroom", "3 bedroom": "3-bedroom", "three bedroom": "3-bedroom",
    "4br": "4-bedroom", "4-br": "4-bedroom", "4 bedroom": "4-bedroom", "four bedroom": "4-bedroom",
    "5br": "5-bedroom", "5-br": "5-bedroom", "5 bedroom": "5-bedroom", "five bedroom": "5-bedroom",
}

# Fallback companies used when every provider fails: (name, price factor, rating, services, duration, availability)
FALLBACK_COMPANIES: list[tuple] = [
    (
        "Premium Movers USA", 1.2, 4.8,
        ["Full packing", "Insurance included", "Storage available"],
        "2-3 days", "good",
    ),
    (
        "Budget Moving Solutions", 0.8, 4.3,
        ["Basic moving", "Optional packing", "Standard insurance"],
        "3-5 days", "excellent",
    ),
    (
        "Elite Relocation Services", 1.1, 4.6,
        ["White glove service", "Full insurance", "Expedited delivery"],
        "1-2 days", "limited",
    ),
]
