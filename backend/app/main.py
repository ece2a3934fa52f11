from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .api.routes import router as api_router
from .api.websocket import router as ws_router
from .core.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = FastAPI(
    title="recipe2cart",
    version="0.1.0",
    description="Turns a recipe URL into a simplified, catalog-matched shopping list",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
app.include_router(ws_router)


@app.get("/api/health")
async def health_check():
    return {
        "status": "ok",
        "message": "recipe2cart API is running",
        "openai_configured": bool(settings.openai_api_key),
        "spoonacular_configured": bool(settings.spoonacular_api_key),
        "serpapi_configured": bool(settings.serpapi_key),
    }


def run():
    """Serve the app with uvicorn; the WebSocket route relies on its websockets backend."""
    import uvicorn

    log = logging.getLogger(__name__)
    log.info(f"🚀 Starting recipe2cart on {settings.host}:{settings.port}")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        ws="websockets",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
