# team_model.py
# Defines the Team model (clubs taking part in the league).

from typing import Optional
from sqlmodel import SQLModel, Field


class Team(SQLModel, table=True):
    """Database model for a club in the league. Reference data, never edited by the portal."""
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    abbreviation: str                                      # e.g. "AVA", also used for the logo file
    highlighted: bool = Field(default=False)               # Spotlighted club on the table
