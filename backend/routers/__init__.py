from .donors import router as donors_router
from .requests import router as requests_router
from .dashboard import router as dashboard_router
from .admin import router as admin_router

all_routers = [donors_router, requests_router, dashboard_router, admin_router]
