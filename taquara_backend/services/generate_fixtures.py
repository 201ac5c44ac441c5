# generate_fixtures.py
# Service for generating the season fixtures (double round-robin).

from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from sqlmodel import Session, select

from taquara_backend.core.config import SEASON_START
from taquara_backend.models.match_model import Match
from taquara_backend.models.team_model import Team

# Slots used inside a round, as offsets from the round's first day (Saturday)
ROUND_SLOTS = [
    timedelta(days=0),                 # Saturday
    timedelta(days=0, hours=2),        # Saturday, late game
    timedelta(days=1),                 # Sunday
    timedelta(days=1, hours=2),        # Sunday, late game
    timedelta(days=2, hours=5),        # Monday night
]


def build_round_robin(team_ids: Sequence[int]) -> List[List[tuple]]:
    """
    Returns the rounds of a double round-robin as lists of (home_id, away_id).
    Algorithm: "Circle Method"; the second half mirrors the first with home/away swapped.
    """
    ids: List[Optional[int]] = list(team_ids)
    if len(ids) < 2:
        raise ValueError("Not enough teams to generate fixtures.")
    if len(ids) % 2 != 0:
        ids.append(None)  # Add a dummy "bye" if odd number of teams

    half = len(ids) // 2
    rounds = []

    for cycle in range(2):  # Two cycles (home/away)
        rotated = ids[:]
        for _ in range(len(ids) - 1):  # Each round in this cycle
            round_fixtures = []
            for i in range(half):
                home = rotated[i]
                away = rotated[-i - 1]

                if home is None or away is None:
                    continue  # Skip bye

                # Swap home/away in second cycle
                if cycle == 1:
                    home, away = away, home

                round_fixtures.append((home, away))
            rounds.append(round_fixtures)

            # Rotate teams (keep the first team fixed)
            rotated = [rotated[0]] + [rotated[-1]] + rotated[1:-1]

    return rounds


def generate_fixtures(team_ids: Sequence[int], season_start: datetime = SEASON_START) -> List[Match]:
    """
    Builds unsaved Match rows: one round per week starting at season_start,
    games of a round spread over the weekend slots.
    """
    matches = []
    for round_index, fixtures in enumerate(build_round_robin(team_ids)):
        round_start = season_start + timedelta(weeks=round_index)
        for game_index, (home_id, away_id) in enumerate(fixtures):
            matches.append(Match(
                round=round_index + 1,
                date=round_start + ROUND_SLOTS[game_index % len(ROUND_SLOTS)],
                home_team_id=home_id,
                away_team_id=away_id,
            ))
    return matches


def generate_fixtures_for_league(session: Session, season_start: datetime = SEASON_START) -> List[Match]:
    """
    Replaces every fixture with a freshly generated double round-robin for the
    registered teams. Intended for seeding an empty season.
    """
    teams = session.exec(select(Team).order_by(Team.id)).all()
    if len(teams) < 2:
        raise ValueError("Not enough teams to generate fixtures.")

    # ✅ Clear existing fixtures (if any)
    for match in session.exec(select(Match)).all():
        session.delete(match)
    session.commit()

    matches = generate_fixtures([t.id for t in teams], season_start)
    session.add_all(matches)
    session.commit()
    print(f"✅ Fixtures generated ({len(matches)} matches total)")
    return matches
