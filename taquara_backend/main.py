import logging

from fastapi import FastAPI
from sqlmodel import select, Session
from taquara_backend.core.database import init_db, sync_engine
from taquara_backend.seed.seed_all import seed_all
from taquara_backend.models.team_model import Team

# --- Routers ---
from taquara_backend.core.auth import router as auth_router
from taquara_backend.routes.league_routes import router as league_router
from taquara_backend.routes.prediction_routes import router as prediction_router
from taquara_backend.routes.admin_routes import router as admin_router
from taquara_backend.routes.simulation_routes import router as simulation_router

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = FastAPI(title="Taquara league & predictions")


@app.on_event("startup")
async def on_startup():
    # 1️⃣ Init DB tables async
    await init_db()

    # 2️⃣ Auto-seed DB in sync mode
    with Session(sync_engine) as session:
        team_count = len(session.exec(select(Team)).all())
    if team_count == 0:
        print("🌱 No teams found. Auto-seeding database...")
        seed_all()  # ✅ Uses sync engine only
    else:
        print("✅ Database already seeded. Skipping auto-seed.")


# Routers
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(league_router, prefix="/league", tags=["League"])
app.include_router(prediction_router, prefix="/predictions", tags=["Predictions"])
app.include_router(admin_router, prefix="/admin", tags=["Admin"])
app.include_router(simulation_router, prefix="/simulation", tags=["Simulation"])
