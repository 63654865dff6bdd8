from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.exceptions import register_exception_handlers
from app.startup import configure_logging, run_startup_checks

# Register all tables on Base.metadata
from app import models  # noqa: F401

# ========== Authentication ==========
from modules.auth import auth_router

# ========== Reservations ==========
from modules.reservations import reservations_router

# ========== Orders & live tracking ==========
from modules.orders import orders_router, order_socket_router

# ========== Loyalty & Wallet ==========
from modules.loyalty import loyalty_router
from modules.wallet import wallet_router

# ========== Payments ==========
from modules.payments import payments_router

# ========== Notifications ==========
from modules.notifications import notifications_router

configure_logging()

app = FastAPI(
    title=f"{settings.app_name} API",
    description="""
    Food ordering and delivery backend.

    ## Features

    * **Reservations** - Public booking form with admin management
    * **Orders** - Order placement with live tracking over WebSocket
    * **Loyalty** - Points, tiers and referral bonuses
    * **Wallet** - Prepaid balance with a full transaction ledger
    * **Payments** - Stripe payment intents and webhooks, wallet checkout
    * **Notifications** - In-app notification inbox

    ## Authentication

    Most endpoints require a JWT bearer token. Use `/auth/login` to obtain one;
    `/auth/refresh` issues a new access token from the refresh cookie.
    """,
    version="1.0.0",
    debug=settings.debug,
)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ========== Include all routers (auth first) ==========
app.include_router(auth_router)
app.include_router(reservations_router)
app.include_router(orders_router)
app.include_router(order_socket_router)
app.include_router(loyalty_router)
app.include_router(wallet_router)
app.include_router(payments_router)
app.include_router(notifications_router)


@app.on_event("startup")
async def startup_event():
    """Validate configuration on application startup"""
    run_startup_checks()


@app.get("/")
def read_root():
    return {"message": f"{settings.app_name} backend is running"}


@app.get("/health")
def health():
    return {"status": "ok", "environment": settings.environment}
