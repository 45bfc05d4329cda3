from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .guideline.dataset import DEFAULT_DATASET
from .routers import calculations, exports, guideline

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("feecalc")

app = FastAPI(
    title="ECSA Fee Calculator",
    description="Professional engineering fees per the ECSA guideline, with stage allocation and exports",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(guideline.router, prefix="/api")
app.include_router(calculations.router, prefix="/api")
app.include_router(exports.router, prefix="/api")

logger.info(
    f"Guideline loaded: {DEFAULT_DATASET.name} ({DEFAULT_DATASET.reference}), "
    f"{len(DEFAULT_DATASET.tables)} tables"
)


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME}
