from typing import Final

# Meal selection
MAX_RANKED_MEALS: Final[int] = 8
LEGACY_COST_WEIGHT: Final[float] = 0.01
GROCERY_CATEGORIES: Final[tuple[str, ...]] = ("grains", "protein", "dairy", "produce", "pantry")

# Narration
MAX_NARRATION_CHARS: Final[int] = 5000

# Store lookup
EARTH_RADIUS_MILES: Final[float] = 3959.0
MAX_STORES: Final[int] = 10
STORES_TO_ENRICH: Final[int] = 5
FALLBACK_STORES: Final[list[dict]] = [
    {"id": "fallback-1", "name": "Neighborhood Market", "address": "Enable location search for real stores nearby", "distance": "0.5 mi"},
    {"id": "fallback-2", "name": "Discount Grocery", "address": "Enable location search for real stores nearby", "distance": "1.2 mi"},
    {"id": "fallback-3", "name": "Community Food Co-op", "address": "Enable location search for real stores nearby", "distance": "2.0 mi"},
]

# Countries whose cuisine signal is strong enough to restrict candidates
COUNTRY_REGIONS: Final[dict[str, str]] = {
    "JP": "japanese",
    "IN": "indian",
    "CN": "chinese",
    "MX": "mexican",
}

# US state -> region tags, first tag is primary
STATE_REGIONS: Final[dict[str, list[str]]] = {
    "AL": ["southeast"], "AK": ["west_coast"], "AZ": ["southwest", "mexican"], "AR": ["southeast"],
    "CA": ["west_coast", "mexican"], "CO": ["mountain", "southwest"], "CT": ["northeast"],
    "DE": ["northeast"], "DC": ["northeast"], "FL": ["southeast"], "GA": ["southeast"],
    "HI": ["west_coast", "japanese"], "ID": ["mountain"], "IL": ["midwest"], "IN": ["midwest"],
    "IA": ["midwest"], "KS": ["midwest"], "KY": ["southeast"], "LA": ["southeast"],
    "ME": ["northeast"], "MD": ["northeast"], "MA": ["northeast"], "MI": ["midwest"],
    "MN": ["midwest"], "MS": ["southeast"], "MO": ["midwest"], "MT": ["mountain"],
    "NE": ["midwest"], "NV": ["mountain", "southwest"], "NH": ["northeast"], "NJ": ["northeast"],
    "NM": ["southwest", "mexican"], "NY": ["northeast"], "NC": ["southeast"], "ND": ["midwest"],
    "OH": ["midwest"], "OK": ["southwest"], "OR": ["west_coast"], "PA": ["northeast"],
    "RI": ["northeast"], "SC": ["southeast"], "SD": ["midwest"], "TN": ["southeast"],
    "TX": ["southwest", "mexican"], "UT": ["mountain"], "VT": ["northeast"], "VA": ["southeast"],
    "WA": ["west_coast"], "WV": ["southeast"], "WI": ["midwest"], "WY": ["mountain"],
}

# Resolved region -> template regions it prefers (restricting list for countries)
PREFERRED_REGIONS: Final[dict[str, list[str]]] = {
    "japanese": ["japanese", "chinese", "general"],
    "chinese": ["chinese", "japanese", "general"],
    "indian": ["indian", "general"],
    "mexican": ["mexican", "southwest", "general"],
    "southwest": ["southwest", "mexican"],
    "southeast": ["southeast"],
    "northeast": ["northeast"],
    "midwest": ["midwest"],
    "west_coast": ["west_coast", "mexican", "japanese"],
    "mountain": ["mountain", "southwest"],
}

# Provider endpoints
GOOGLE_GEOCODE_URL: Final[str] = "https://maps.googleapis.com/maps/api/geocode/json"
GOOGLE_NEARBY_URL: Final[str] = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
GOOGLE_DETAILS_URL: Final[str] = "https://maps.googleapis.com/maps/api/place/details/json"
ELEVENLABS_TTS_URL: Final[str] = "https://api.elevenlabs.io/v1/text-to-speech/{voice_id}/stream"
