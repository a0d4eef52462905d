"""
Application configuration, read from the environment (and an optional .env file).
"""
import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")
DATABASE_NAME = os.getenv("DATABASE_NAME", "storefront")

# No real auth yet: every request acts as this user
DEMO_USER_ID = os.getenv("DEMO_USER_ID", "6903c199a74f687293cca302")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", 8000))
SEED_FILE = os.getenv("SEED_FILE", "products.json")
