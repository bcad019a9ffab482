import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


class Config:
    BASE_DIR = Path(__file__).resolve().parent.parent
    DATA_DIR = BASE_DIR / "data"
    USERS_FILE = Path(os.getenv("USERS_FILE") or DATA_DIR / "data.json")
    NAME_MAX_LENGTH = 60
    EMAIL_MAX_LENGTH = 120


class DevConfig(Config):
    DEBUG = True


class ProdConfig(Config):
    DEBUG = False
