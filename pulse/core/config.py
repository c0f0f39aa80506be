from os import getenv

DEFAULT_CATEGORIES = "Work,Personal,Learning,Health,Finances,Social,Vision"


class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "sqlite:///./pulse.db")
    STORAGE_PREFIX = getenv("PULSE_STORAGE_PREFIX", "pulse")
    CATEGORIES = [c.strip() for c in getenv("PULSE_CATEGORIES", DEFAULT_CATEGORIES).split(",") if c.strip()]

    GITHUB_API_URL = getenv("GITHUB_API_URL", "https://api.github.com")
    SYNC_TIMEOUT = int(getenv("PULSE_SYNC_TIMEOUT", "30"))  # secondes
    SYNC_PATH = getenv("PULSE_SYNC_PATH", "data.json")

    NOTIFY_WINDOW_HOURS = int(getenv("PULSE_NOTIFY_WINDOW_HOURS", "24"))
    APPROACHING_DAYS = int(getenv("PULSE_APPROACHING_DAYS", "2"))

    @property
    def data_key(self) -> str:
        return f"{self.STORAGE_PREFIX}_todo_data"

    @property
    def config_key(self) -> str:
        return f"{self.STORAGE_PREFIX}_gh_config"

settings = Settings()
