import sys
import os

# Add the project root to the python path so we can import from database
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from dotenv import load_dotenv

# Load environment variables from .env.local (or .env)
env_path = os.path.join(os.path.dirname(__file__), '..', '.env.local')
if not os.path.exists(env_path):
    env_path = os.path.join(os.path.dirname(__file__), '..', '.env')
load_dotenv(env_path)

from database.db import Base, SessionLocal, engine, init_db
from services.ingestion_service import run_seed


def reset_database(assume_yes: bool = False, reseed: bool = True) -> bool:
    """
    Drops and recreates every ReadStream table, then optionally reseeds the
    sample headlines, journals and books.
    """
    init_db()
    tables = sorted(Base.metadata.tables)

    print("WARNING: This will delete ALL data from the following tables:")
    for t in tables:
        print(f" - {t}")

    if not assume_yes:
        confirm = input("Are you sure you want to proceed? (yes/no): ")
        if confirm.lower() != "yes":
            print("Operation cancelled.")
            return False

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    print("Successfully reset all tables.")

    if reseed:
        run_seed(SessionLocal, os.getenv("NEWSAPI_ORG_KEY"))
        print("Seeded sample content.")
    return True


if __name__ == "__main__":
    reset_database(assume_yes="--yes" in sys.argv, reseed="--no-seed" not in sys.argv)
