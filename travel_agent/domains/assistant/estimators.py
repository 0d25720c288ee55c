"""
Travel Agent - Deterministic Estimators
Static lookup tables used whenever a live data source is unavailable.

Every function here is pure and total: unknown inputs resolve to a
named default. The only randomness is the hotel name pick, which draws
from a caller-owned random.Random.
"""

import logging
import random

from travel_agent.domains.assistant.schemas import BudgetPlan

logger = logging.getLogger(__name__)


# ============ Budget Split ============


BUDGET_SHARES: dict[str, float] = {
    "flight": 0.45,
    "hotel": 0.25,
    "food": 0.15,
    "transport": 0.10,
    "misc": 0.05,
}


def split_budget(total: int | float) -> BudgetPlan:
    """Split a total budget into 45/25/15/10/5 percent buckets.

    Each bucket is truncated toward zero, so the buckets may sum to up to
    four units less than the total. Non-positive totals give all zeros.
    """
    if total <= 0:
        logger.debug(f"Non-positive total budget {total}, returning zero budget")
        return BudgetPlan()

    return BudgetPlan(
        **{bucket: int(float(total) * share) for bucket, share in BUDGET_SHARES.items()}
    )


# ============ Fares ============


DEFAULT_FARE = (38000, "EVA Air")

# Keyed by "ORIGIN-DESTINATION", looked up in both directions
ROUTE_FARES: dict[str, tuple[int, str]] = {
    "BKK-YVR": (38000, "EVA Air"),  # Vancouver
    "BKK-NRT": (15000, "Thai Airways"),  # Tokyo
    "BKK-ICN": (12000, "Korean Air"),  # Seoul
    "BKK-SIN": (5000, "Singapore Airlines"),
    "BKK-HKG": (6000, "Cathay Pacific"),
    "BKK-TPE": (8000, "EVA Air"),  # Taipei
    "BKK-KUL": (4000, "AirAsia"),  # Kuala Lumpur
    "BKK-CGK": (7000, "Thai Lion Air"),  # Jakarta
    "BKK-SYD": (35000, "Qantas"),
    "BKK-LHR": (45000, "British Airways"),  # London
    "BKK-CDG": (42000, "Air France"),  # Paris
    "BKK-FRA": (40000, "Lufthansa"),  # Frankfurt
    "BKK-LAX": (50000, "United Airlines"),  # Los Angeles
    "BKK-JFK": (52000, "American Airlines"),  # New York
    "BKK-DXB": (25000, "Emirates"),  # Dubai
}


def estimate_fare(origin: str, destination: str) -> tuple[int, str]:
    """Estimate (price in THB, airline) for a route, in either direction."""
    origin = origin.strip().upper()
    destination = destination.strip().upper()

    fare = ROUTE_FARES.get(f"{origin}-{destination}")
    if fare is None:
        fare = ROUTE_FARES.get(f"{destination}-{origin}")
    return fare or DEFAULT_FARE


def estimate_flight_price(origin: str, destination: str) -> int:
    return estimate_fare(origin, destination)[0]


def estimate_airline(origin: str, destination: str) -> str:
    return estimate_fare(origin, destination)[1]


# ============ City Resolution ============


def resolve_city(city: str, known: list[str] | dict) -> str | None:
    """Resolve a city against known keys.

    Exact case-insensitive match first, then the first key (in table order)
    that contains the query or is contained by it.
    """
    city = city.strip().lower()
    if not city:
        return None
    if city in known:
        return city
    for key in known:
        if key in city or city in key:
            return key
    return None


# ============ Lodging ============


DEFAULT_NIGHTLY_RATE = 2500

# Budget hotel price per night in THB
CITY_NIGHTLY_RATES: dict[str, int] = {
    "vancouver": 2500,
    "tokyo": 2000,
    "seoul": 1800,
    "singapore": 2200,
    "hong kong": 2400,
    "taipei": 1600,
    "kuala lumpur": 1200,
    "jakarta": 1000,
    "sydney": 3000,
    "london": 4000,
    "paris": 3500,
    "frankfurt": 3200,
    "los angeles": 3800,
    "new york": 4500,
    "dubai": 2800,
    "bangkok": 1000,
    "phuket": 1500,
    "chiang mai": 800,
    "pattaya": 1200,
    "krabi": 1400,
    "osaka": 2200,
    "kyoto": 2400,
    "busan": 1600,
    "bali": 1300,
    "hanoi": 900,
    "ho chi minh": 1100,
    "phnom penh": 700,
    "vientiane": 600,
    "yangon": 800,
    "manila": 1000,
    "cebu": 900,
}

CITY_HOTEL_NAMES: dict[str, list[str]] = {
    "vancouver": ["Comfort Inn Downtown", "Budget Hotel Vancouver", "City Center Inn"],
    "tokyo": ["Tokyo Budget Hotel", "Shinjuku Comfort Inn", "Asakusa Guesthouse"],
    "seoul": ["Seoul Budget Hotel", "Gangnam Inn", "Myeongdong Guesthouse"],
    "singapore": ["Budget Hotel Singapore", "Chinatown Inn", "Little India Hotel"],
    "hong kong": ["Hong Kong Budget Inn", "Tsim Sha Tsui Hotel", "Kowloon Guesthouse"],
    "taipei": ["Taipei Budget Hotel", "Ximending Inn", "Da'an Guesthouse"],
    "kuala lumpur": ["KL Budget Hotel", "Bukit Bintang Inn", "KLCC Guesthouse"],
    "bangkok": ["Bangkok Budget Inn", "Sukhumvit Hotel", "Silom Guesthouse"],
    "phuket": ["Patong Beach Hotel", "Phuket Budget Inn", "Kata Guesthouse"],
    "london": ["London Budget Hotel", "Westminster Inn", "Camden Guesthouse"],
    "paris": ["Paris Budget Hotel", "Marais Inn", "Montmartre Guesthouse"],
    "new york": ["NYC Budget Hotel", "Manhattan Inn", "Brooklyn Guesthouse"],
    "sydney": ["Sydney Budget Inn", "Darling Harbour Hotel", "Bondi Guesthouse"],
    "dubai": ["Dubai Budget Hotel", "Deira Inn", "Downtown Guesthouse"],
}


def estimate_hotel_price_per_night(city: str) -> int:
    """Estimate a budget nightly rate in THB for a city."""
    key = resolve_city(city, CITY_NIGHTLY_RATES)
    if key is None:
        return DEFAULT_NIGHTLY_RATE
    return CITY_NIGHTLY_RATES[key]


def estimate_hotel_name(city: str, rng: random.Random) -> str:
    """Pick a plausible hotel name for a city using the caller's rng."""
    key = resolve_city(city, CITY_HOTEL_NAMES)
    if key is None:
        return f"{city.strip().title()} Budget Hotel"
    return rng.choice(CITY_HOTEL_NAMES[key])


# ============ Climate ============


DEFAULT_TEMPERATURE = 15
DEFAULT_MONTH = "january"

MONTHS = [
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
]

_MONTH_ALIASES: dict[str, str] = {}
for _number, _name in enumerate(MONTHS, start=1):
    _MONTH_ALIASES[str(_number)] = _name
    _MONTH_ALIASES[_name[:3]] = _name
    _MONTH_ALIASES[_name] = _name

CITY_TEMPERATURES: dict[str, dict[str, int]] = {
    "vancouver": {
        "january": 6, "february": 7, "march": 9, "april": 12,
        "may": 15, "june": 18, "july": 21, "august": 21,
        "september": 18, "october": 13, "november": 9, "december": 6,
    },
    "tokyo": {
        "january": 6, "february": 7, "march": 11, "april": 16,
        "may": 20, "june": 23, "july": 27, "august": 29,
        "september": 25, "october": 19, "november": 14, "december": 9,
    },
    "bangkok": {
        "january": 27, "february": 29, "march": 30, "april": 31,
        "may": 30, "june": 29, "july": 29, "august": 29,
        "september": 28, "october": 28, "november": 27, "december": 26,
    },
}

# Months in which the condition table reports "Rainy"
RAINY_CONDITION_MONTHS: dict[str, list[str]] = {
    "vancouver": ["november", "december", "january", "february", "march"],
    "bangkok": ["may", "june", "july", "august", "september", "october"],
    "tokyo": ["june", "july", "september"],
}

# Months with a high rain probability
RAINY_SEASON_MONTHS: dict[str, list[str]] = {
    **RAINY_CONDITION_MONTHS,
    "singapore": ["november", "december", "january"],
    "kuala lumpur": ["april", "may", "october", "november"],
}

HIGH_RAIN_PROBABILITY = 75.0
LOW_RAIN_PROBABILITY = 20.0


def normalize_month(month: str | int | None) -> str:
    """Normalize "12", "Dec" or "December" to "december". Defaults to January."""
    value = str(month if month is not None else "").strip().lower()
    return _MONTH_ALIASES.get(value, DEFAULT_MONTH)


def estimate_temperature(city: str, month: str) -> int:
    """Average temperature in Celsius for a city and month."""
    key = resolve_city(city, CITY_TEMPERATURES)
    if key is None:
        return DEFAULT_TEMPERATURE
    return CITY_TEMPERATURES[key].get(normalize_month(month), DEFAULT_TEMPERATURE)


def estimate_condition(city: str, month: str) -> str:
    """Return "Rainy" during a city's wet months, otherwise "Sunny"."""
    key = resolve_city(city, RAINY_CONDITION_MONTHS)
    if key is not None and normalize_month(month) in RAINY_CONDITION_MONTHS[key]:
        return "Rainy"
    return "Sunny"


def estimate_rain_probability(city: str, month: str) -> float:
    """Rain probability in percent for a city and month."""
    key = resolve_city(city, RAINY_SEASON_MONTHS)
    if key is not None and normalize_month(month) in RAINY_SEASON_MONTHS[key]:
        return HIGH_RAIN_PROBABILITY
    return LOW_RAIN_PROBABILITY


# ============ Airport Codes ============


DEFAULT_AIRPORT = "SIN"

AIRPORT_CODES: dict[str, str] = {
    "canada": "YVR",
    "vancouver": "YVR",
    "japan": "NRT",
    "tokyo": "NRT",
    "korea": "ICN",
    "seoul": "ICN",
    "singapore": "SIN",
    "hong kong": "HKG",
    "taipei": "TPE",
    "taiwan": "TPE",
    "malaysia": "KUL",
    "kuala lumpur": "KUL",
    "indonesia": "CGK",
    "jakarta": "CGK",
    "australia": "SYD",
    "sydney": "SYD",
    "uk": "LHR",
    "london": "LHR",
    "england": "LHR",
    "france": "CDG",
    "paris": "CDG",
    "germany": "FRA",
    "frankfurt": "FRA",
    "usa": "LAX",
    "america": "LAX",
    "los angeles": "LAX",
    "new york": "JFK",
    "uae": "DXB",
    "dubai": "DXB",
    "thailand": "BKK",
    "bangkok": "BKK",
    "phuket": "HKT",
    "chiang mai": "CNX",
    "vietnam": "SGN",
    "hanoi": "HAN",
    "ho chi minh": "SGN",
    "philippines": "MNL",
    "manila": "MNL",
    "india": "DEL",
    "delhi": "DEL",
    "china": "PEK",
    "beijing": "PEK",
    "shanghai": "PVG",
}


def get_airport_code(destination: str) -> str:
    """Map a city or country name to its main IATA airport code."""
    key = resolve_city(destination, AIRPORT_CODES)
    if key is None:
        return DEFAULT_AIRPORT
    return AIRPORT_CODES[key]
