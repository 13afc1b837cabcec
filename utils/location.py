from typing import List, Tuple

# First match wins; anything else is treated as the home country
COUNTRY_KEYWORDS: List[Tuple[str, List[str]]] = [
    ("IN", [
        "bangalore", "mumbai", "delhi", "hyderabad", "chennai", "pune", "kolkata",
        "mysore", "karnataka", "maharashtra", "tamil nadu", "telangana", "gujarat",
        "rajasthan", "kerala", "west bengal", "india", "indian",
    ]),
    ("GB", ["london", "uk", "united kingdom", "birmingham", "manchester"]),
    ("CA", ["toronto", "vancouver", "montreal", "canada"]),
    ("AU", ["sydney", "melbourne", "brisbane", "australia"]),
    ("SG", ["singapore"]),
    ("AE", ["dubai", "uae", "united arab emirates"]),
]

DEFAULT_COUNTRY_CODE = "US"

# Locations served by the India-only job portal
INDIA_PORTAL_KEYWORDS = ["india", "mysore", "bangalore", "karnataka"]

US_STATES = [
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado",
    "Connecticut", "Delaware", "Florida", "Georgia", "Hawaii", "Idaho",
    "Illinois", "Indiana", "Iowa", "Kansas", "Kentucky", "Louisiana",
    "Maine", "Maryland", "Massachusetts", "Michigan", "Minnesota", "Mississippi",
    "Missouri", "Montana", "Nebraska", "Nevada", "New Hampshire", "New Jersey",
    "New Mexico", "New York", "North Carolina", "North Dakota", "Ohio", "Oklahoma",
    "Oregon", "Pennsylvania", "Rhode Island", "South Carolina", "South Dakota",
    "Tennessee", "Texas", "Utah", "Vermont", "Virginia", "Washington",
    "West Virginia", "Wisconsin", "Wyoming",
]


def get_country_code(location: str) -> str:
    """
    Derive a two-letter country code from free-form location text

    Args:
        location: City, state or country as typed by the user

    Returns:
        Upper-case ISO country code
    """
    location_lower = (location or "").lower()
    for code, keywords in COUNTRY_KEYWORDS:
        if any(keyword in location_lower for keyword in keywords):
            return code
    return DEFAULT_COUNTRY_CODE


def is_india_portal_location(location: str) -> bool:
    location_lower = (location or "").lower()
    return any(keyword in location_lower for keyword in INDIA_PORTAL_KEYWORDS)


def split_location(location: str) -> Tuple[str, str]:
    """Split "City, State" into its parts; the state may be empty"""
    parts = (location or "").split(",")
    city = parts[0].strip() or (location or "")
    state = parts[1].strip() if len(parts) > 1 else ""
    return city, state
