"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ALLOW_REGISTRATIONS_KEY = "allow_registrations"

HISTORY_LIMIT = 20
TOP_RANK_COUNT = 3
RANK_LABELS = ("1°", "2°", "3°")

UNKNOWN_CLASS_NAME = "Unknown Class"
UNKNOWN_CLASS_NAME_PT = "Desconhecida"

# Fixed offset used by the "today" status check (Brasília is UTC-3).
DEFAULT_TODAY_OFFSET_HOURS = 3
DEFAULT_RECEIPT_URL_TTL_SECONDS = 3600

# Editorial figures printed on the general report; not derived from registrations.
DEFAULT_MAGAZINES_BY_CATEGORY = {
    "children": 20,
    "adolescents": 17,
    "youth": 15,
    "new_converts": 9,
    "adults": 136,
    "teachers": 36,
}

ADMIN_ACCOUNT = "admin"
