"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DB_KEY = "saferoute360_db"

ID_HEX_BYTES = 16

UNASSIGNED_DRIVER_LABEL = "Unassigned"
ROUTE_COMPLETE_LABEL = "Complete"

DEFAULT_STORE_PATH = ".saferoute"
