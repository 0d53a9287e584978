from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "INFO"

    # Move generation
    long_jump_lookahead: int = 10

    # MCTS search
    mcts_exploration_constant: float = 1.4
    mcts_simulation_depth: int = 15
    mcts_default_time_limit_ms: int = 1000
    opponent_distance_weight: float = 0.5

    # Difficulty → search budget (ms)
    easy_time_limit_ms: int = 500
    medium_time_limit_ms: int = 1000
    hard_time_limit_ms: int = 2000

    # Agent kind used when a player config does not name one
    default_agent_kind: str = "mcts"

    model_config = SettingsConfigDict(
        env_prefix="STARHALMA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    def time_limit_for(self, difficulty: str | None) -> int:
        """Search budget in ms for a difficulty level; unknown levels get the default."""
        limits = {
            "easy": self.easy_time_limit_ms,
            "medium": self.medium_time_limit_ms,
            "hard": self.hard_time_limit_ms,
        }
        key = getattr(difficulty, "value", difficulty)
        return limits.get(key, self.mcts_default_time_limit_ms)


settings = Settings()
