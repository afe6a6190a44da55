import os

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Directory capacity (number of users kept in memory)
MAX_USERS = int(os.getenv("MAX_USERS", "50"))

# Seed admin/admin123 and user1/user123 on startup
SEED_DEFAULT_USERS = bool(int(os.getenv("SEED_DEFAULT_USERS", "1")))
