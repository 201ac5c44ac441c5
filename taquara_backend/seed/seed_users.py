from sqlmodel import Session, select
from taquara_backend.core.auth import pwd_context
from taquara_backend.core.config import ADMIN_EMAIL, ADMIN_PASSWORD
from taquara_backend.core.database import sync_engine
from taquara_backend.models.user_model import User

# Presenters have no credentials, they only appear in the prediction ranking
PRESENTERS = ["Diego", "Marcelo", "Paulinho", "Ricardo"]


def seed_users():
    print("👤 Starting user seeding...")

    with Session(sync_engine) as session:
        existing = {u.name for u in session.exec(select(User)).all()}
        admin = session.exec(select(User).where(User.is_admin == True)).first()

        if not admin:
            if not ADMIN_PASSWORD:
                print("⚠️ TAQUARA_ADMIN_PASSWORD is not set. Skipping admin creation.")
            else:
                session.add(User(
                    name="Admin",
                    email=ADMIN_EMAIL,
                    password_hash=pwd_context.hash(ADMIN_PASSWORD),
                    is_admin=True,
                ))
                print(f"✅ Created admin ({ADMIN_EMAIL})")

        new_presenters = [User(name=name) for name in PRESENTERS if name not in existing]
        session.add_all(new_presenters)
        session.commit()
        print(f"✅ Created {len(new_presenters)} presenters")


if __name__ == "__main__":
    seed_users()
