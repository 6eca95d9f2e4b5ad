# middleware.py
import os
from fastapi.middleware.cors import CORSMiddleware

# Headers the listing form client sends with every submission
ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def add_cors_middleware(app):
    origins = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=ALLOWED_HEADERS,
    )
