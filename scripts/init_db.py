# scripts/init_db.py
from facultyeval.core.db import get_engine, init_db
from facultyeval.core.settings import settings

if __name__ == "__main__":
    init_db(get_engine())
    print(f"Schema ensured on {settings.DATABASE_URL}")
