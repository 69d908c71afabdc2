import logging

import uvicorn
from fastapi import FastAPI

from carhunter.api.catalog import router as catalog_router
from carhunter.api.errors import register_exception_handlers
from carhunter.api.options import router as options_router
from carhunter.api.search import router as search_router
from carhunter.core.config import SETTINGS


logging.basicConfig(
    level=SETTINGS.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="CarHunter API")

app.include_router(search_router)
app.include_router(catalog_router)
app.include_router(options_router)
register_exception_handlers(app)

if not SETTINGS.llm_enabled:
    logger.warning("PERPLEXITY_API_KEY is not set. /api/search will return errors until it is configured.")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


def main() -> None:
    uvicorn.run(app, host=SETTINGS.host, port=SETTINGS.port, log_level=SETTINGS.log_level.lower())


if __name__ == "__main__":
    main()
