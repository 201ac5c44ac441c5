from sqlmodel import Session, select
from taquara_backend.core.database import sync_engine
from taquara_backend.models.team_model import Team

# Série B 2025 clubs: (name, abbreviation). The spotlighted club is flagged below.
SERIE_B_TEAMS = [
    ("Goiás", "GOI"),
    ("Coritiba", "CFC"),
    ("Novorizontino", "NOV"),
    ("Chapecoense", "CHA"),
    ("Cuiabá", "CUI"),
    ("Vila Nova", "VNO"),
    ("Remo", "REM"),
    ("Avaí", "AVA"),
    ("Athletico-PR", "CAP"),
    ("Criciúma", "CRI"),
    ("Athletic Club", "ATH"),
    ("Operário", "OPE"),
    ("CRB", "CRB"),
    ("Atlético-GO", "ACG"),
    ("América-MG", "AME"),
    ("Paysandu", "PAY"),
    ("Ferroviária", "FER"),
    ("Amazonas", "AMA"),
    ("Volta Redonda", "VOL"),
    ("Botafogo-SP", "BFC"),
]
HIGHLIGHTED_TEAM = "CRI"


def seed_teams():
    print("🏟 Starting team seeding...")

    with Session(sync_engine) as session:
        existing = {t.abbreviation for t in session.exec(select(Team)).all()}

        new_teams = [
            Team(name=name, abbreviation=abbr, highlighted=(abbr == HIGHLIGHTED_TEAM))
            for name, abbr in SERIE_B_TEAMS
            if abbr not in existing
        ]

        if not new_teams:
            print("✅ All teams already exist")
            return

        session.add_all(new_teams)
        session.commit()
        print(f"✅ Created {len(new_teams)} teams")


if __name__ == "__main__":
    seed_teams()
