import uuid

from pydantic import BaseModel, ConfigDict, Field, field_validator

from elite_tournament.core.config import DEFAULT_RATING


class Player(BaseModel):
    """A rostered player. Instances are immutable snapshots.

    Serializes as ``{"id", "name", "currentElo"}`` when dumped by alias.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    current_elo: int = Field(default=DEFAULT_RATING, alias="currentElo")

    @field_validator("name")
    @classmethod
    def validate_name_not_empty(cls, v: str) -> str:
        name = v.strip()
        if not name:
            raise ValueError("Player name cannot be empty")
        return name

    def with_rating(self, rating: int) -> "Player":
        """Return a copy of this player carrying a new rating."""
        return self.model_copy(update={"current_elo": rating})

    def with_name(self, name: str) -> "Player":
        """Return a validated copy of this player with a new display name."""
        return Player(id=self.id, name=name, current_elo=self.current_elo)
