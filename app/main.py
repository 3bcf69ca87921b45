from fastapi import FastAPI
from app.clients.google_sheets import SheetsClient

from app.core.config import settings
from app.core.logging_config import setup_logging
from app.api.v1.router import api_v1_router
from app.services.dependencies import get_redis_store

app = FastAPI(title=settings.app_name, debug=settings.debug)

app.include_router(api_v1_router, prefix="/api/v1")


@app.on_event("startup")
def startup() -> None:
	setup_logging()
	app.state.sheets_client = SheetsClient()


@app.on_event("shutdown")
async def shutdown() -> None:
	await app.state.sheets_client.close()
	await get_redis_store().close()
