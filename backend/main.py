import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from routes.auth import router as auth_router
from routes.chat import router as chat_router
from routes.events import router as events_router
from routes.geocode import router as geocode_router

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Local Vibe API",
    description="Discover local events on a map, filter them and ask the AI assistant for picks",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(events_router)
app.include_router(chat_router)
app.include_router(geocode_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "message": "Local Vibe backend is running"}


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Local Vibe API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "event_store": config.EVENT_STORE,
        "chatbot_enabled": bool(config.GEMINI_API_KEY),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000)
