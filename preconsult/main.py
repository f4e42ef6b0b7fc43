# preconsult/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from preconsult.config import get_settings
from preconsult.api.routes import router as api_router


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="PreConsult API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


@app.on_event("startup")
def on_startup() -> None:
    logger.info(
        "PreConsult API starting: %d questions per consultation, save delay %.2fs",
        settings.num_questions,
        settings.save_delay_seconds,
    )


@app.get("/")
def root():
    return {"message": "PreConsult API is running"}


app.include_router(api_router, prefix="/api")
