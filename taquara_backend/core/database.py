import os
from sqlmodel import SQLModel, Session
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy import create_engine as create_sync_engine
from taquara_backend.core.config import DB_PATH, SQL_ECHO

# Ensure DB file exists (prevents async context errors)
if not os.path.exists(DB_PATH):
    print("📂 Database file not found. Creating a new one...")
    open(DB_PATH, 'a').close()

# --- Database URLs ---
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"    # Async engine (startup)
SYNC_DATABASE_URL = f"sqlite:///{DB_PATH}"         # Sync engine (routes/seeding)

# --- Engines ---
engine = create_async_engine(DATABASE_URL, echo=SQL_ECHO, future=True)        # Async
sync_engine = create_sync_engine(SYNC_DATABASE_URL, echo=SQL_ECHO, future=True)  # Sync


# --- Initialize DB tables ---
async def init_db():
    """Create tables asynchronously if they don't exist."""
    # Registers every table on SQLModel.metadata before create_all
    from taquara_backend import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


# --- Sync session for seeding/scripts ---
def get_sync_session():
    return Session(sync_engine)


# --- Sync DB session (used in routes) ---
def get_session():
    with Session(sync_engine) as session:
        yield session
