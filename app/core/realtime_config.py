import os

# --------------------------------------------------
# PRESENCE
# --------------------------------------------------

# How old a partner heartbeat may be and still count for matching
PRESENCE_MAX_AGE_MS = int(os.getenv("PRESENCE_MAX_AGE_MS", "120000"))

# --------------------------------------------------
# GEO
# --------------------------------------------------

# Mean Earth radius used by the haversine distance
EARTH_RADIUS_KM = 6371.0

# --------------------------------------------------
# ROUTE CACHE
# --------------------------------------------------

# 4 decimal places is roughly 11 m
ROUTE_CACHE_PRECISION = 4
ROUTE_CACHE_TTL_MS = 7 * 24 * 60 * 60 * 1000

# --------------------------------------------------
# STORE LAYOUT
# --------------------------------------------------

PRESENCE_ROOT = "delivery_boys"
ACTIVE_ORDERS_ROOT = "active_orders"
ROUTE_CACHE_ROOT = "route_cache"
USERS_ROOT = "users"
DRIVERS_ROOT = "drivers"

# Roots accepted by the bulk import
SEEDABLE_ROOTS = (
    ACTIVE_ORDERS_ROOT,
    PRESENCE_ROOT,
    DRIVERS_ROOT,
    ROUTE_CACHE_ROOT,
    USERS_ROOT,
)
