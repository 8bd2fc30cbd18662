"""FastAPI application entrypoint."""

import logging

from fastapi import FastAPI

from src.core.config import settings
from src.core.exceptions import register_exception_handlers
from src.modules.analytics.router import router as admin_analytics_router
from src.modules.appointments.router import admin_router as admin_appointments_router
from src.modules.appointments.router import router as appointments_router
from src.modules.auth.router import router as auth_router
from src.modules.conditions.router import records_router as patient_records_router
from src.modules.conditions.router import router as conditions_router
from src.modules.dashboard.router import router as dashboard_router
from src.modules.pharmacy.admin_router import router as admin_pharmacy_router
from src.modules.pharmacy.router import router as pharmacy_router
from src.modules.prescriptions.router import router as prescriptions_router
from src.modules.providers.admin_router import router as admin_providers_router
from src.modules.providers.router import router as providers_router
from src.modules.reminders.router import router as reminders_router
from src.modules.users.admin_router import router as admin_users_router
from src.modules.users.router import router as users_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version="0.1.0",
    )
    register_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(dashboard_router)
    app.include_router(providers_router)
    app.include_router(appointments_router)
    app.include_router(pharmacy_router)
    app.include_router(reminders_router)
    app.include_router(conditions_router)
    app.include_router(patient_records_router)
    app.include_router(prescriptions_router)
    app.include_router(admin_users_router)
    app.include_router(admin_providers_router)
    app.include_router(admin_appointments_router)
    app.include_router(admin_pharmacy_router)
    app.include_router(admin_analytics_router)

    return app


app = create_app()
