import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grainbroker.config import settings
from grainbroker.middleware.exceptions import register_exception_handlers
from grainbroker.routers import customers, health, orders, suppliers

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="GrainBroker",
    description="Grain brokerage API: customers, suppliers and the orders between them",
    version="0.1.0",
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware ───────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
app.include_router(health.router)
app.include_router(customers.router, prefix="/api/Customers", tags=["customers"])
app.include_router(orders.router, prefix="/api/Orders", tags=["orders"])
app.include_router(suppliers.router, prefix="/api/Suppliers", tags=["suppliers"])
