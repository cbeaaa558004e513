import os

from .config import Config

SECRET_KEY = "test-secret"

DB_CONFIG = Config.db_config(database=os.getenv("DB_NAME", "timeclock_test"))

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
