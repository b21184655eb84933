from fastapi import APIRouter

from app.api.routes import active_orders
from app.api.routes import dispatch
from app.api.routes import presence
from app.api.routes import route_cache
from app.api.routes import users
from app.api.routes import zones

api_router = APIRouter(prefix="/v1")

api_router.include_router(presence.router, prefix="/presence", tags=["presence"])
api_router.include_router(dispatch.router, prefix="/dispatch", tags=["dispatch"])
api_router.include_router(active_orders.router, prefix="/active-orders", tags=["active-orders"])
api_router.include_router(route_cache.router, prefix="/route-cache", tags=["route-cache"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(zones.router, prefix="/zones", tags=["zones"])
