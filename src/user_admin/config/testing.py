import os

DEBUG = False
TESTING = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

MAX_USERS = int(os.getenv("MAX_USERS", "50"))

SEED_DEFAULT_USERS = bool(int(os.getenv("SEED_DEFAULT_USERS", "0")))
