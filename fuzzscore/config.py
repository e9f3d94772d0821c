"""Configuration de la bibliothèque et du service de scoring."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Configuration de l'application."""

    # Winkler - Bonus de préfixe
    WINKLER_P: float = 0.1
    WINKLER_THRESHOLD: float = 0.7
    WINKLER_MAXLENGTH: int = 4

    # TokenMax - Pénalités empiriques
    TOKEN_MAX_UNBASE_SCALE: float = 0.95
    PARTIAL_SCALE: float = 0.9
    PARTIAL_SCALE_FAR: float = 0.6
    # Ratios de longueur qui déclenchent Partial
    PARTIAL_RATIO: float = 1.5
    PARTIAL_FAR_RATIO: float = 8.0

    # Q-grammes
    DEFAULT_QGRAM_SIZE: int = 2

    # Recherche
    DEFAULT_MIN_SCORE: float = 0.8

    # Performance
    DISTANCE_CACHE_SIZE: int = 4096

    # Logs
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "logs"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
