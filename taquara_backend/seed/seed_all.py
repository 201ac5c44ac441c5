# seed_all.py
# Orchestrates all seed scripts to populate the database in the correct order.

from sqlmodel import Session
from taquara_backend.core.database import sync_engine
from taquara_backend.seed.seed_teams import seed_teams
from taquara_backend.seed.seed_users import seed_users
from taquara_backend.services.generate_fixtures import generate_fixtures_for_league
from taquara_backend.services.persistence import recompute_standings


def seed_all():
    print("\n🌱 Starting full database seeding...\n")

    print("➡️  Step 1: Seeding teams...")
    seed_teams()

    print("➡️  Step 2: Seeding users...")
    seed_users()

    with Session(sync_engine) as session:
        print("➡️  Step 3: Generating fixtures...")
        generate_fixtures_for_league(session)

        print("➡️  Step 4: Building the initial standings...")
        recompute_standings(session)

    print("\n✅ Database seeding complete.\n")


if __name__ == "__main__":
    seed_all()
