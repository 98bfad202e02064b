"""
Game rule configuration and validation.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


ABSOLUTE_MIN_PLAYERS = 2
ABSOLUTE_MAX_PLAYERS = 6


class RuleConfig(BaseModel):
    """Configuration for game rules and settings."""

    min_players: int = Field(
        default=ABSOLUTE_MIN_PLAYERS,
        ge=ABSOLUTE_MIN_PLAYERS,
        le=ABSOLUTE_MAX_PLAYERS,
        description="Minimum number of players required to start"
    )
    max_players: int = Field(
        default=ABSOLUTE_MAX_PLAYERS,
        ge=ABSOLUTE_MIN_PLAYERS,
        le=ABSOLUTE_MAX_PLAYERS,
        description="Maximum number of players allowed"
    )
    wildcard_count: int = Field(
        default=2,
        ge=0,
        le=4,
        description="Number of Jokers shuffled into the deck"
    )
    mutation_length: int = Field(
        default=3,
        ge=1,
        le=13,
        description="Cards of the Ace's suit required to complete a mutation"
    )
    log_limit: int = Field(
        default=20,
        ge=1,
        le=200,
        description="Number of game log entries kept, newest first"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for deterministic shuffling"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players doesn't fall below minimum."""
        min_players = info.data.get('min_players', ABSOLUTE_MIN_PLAYERS)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    def validate_player_count(self, player_count: int) -> bool:
        """Check if a player count is valid for this configuration."""
        return self.min_players <= player_count <= self.max_players

    def get_deck_size(self) -> int:
        """Get the total number of cards in the deck."""
        return 52 + self.wildcard_count


# Default configuration instance
default_rules = RuleConfig()


def create_rules(**overrides) -> RuleConfig:
    """Create a RuleConfig with optional overrides."""
    config_dict = default_rules.model_dump()
    config_dict.update(overrides)
    return RuleConfig(**config_dict)
