"""ASGI entry point, e.g. `uvicorn src.main:app`. Settings come from the CHESS_* environment variables."""

from src.app import create_app

app = create_app()
