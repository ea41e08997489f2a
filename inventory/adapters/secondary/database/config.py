from sqlalchemy.orm import declarative_base

import os

# Values come from the environment; defaults give a local SQLite file
DATABASE_NAME = "item_database"
SCHEMA_VERSION = 1

DATA_DIR = os.getenv('INVENTORY_DATA_DIR', '.')
DATABASE_URL = os.getenv('DATABASE_URL', f"sqlite:///{os.path.join(DATA_DIR, DATABASE_NAME)}")
DB_ECHO = os.getenv('DB_ECHO', 'false').lower() == 'true'

Base = declarative_base()
