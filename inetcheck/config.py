import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    INETCHECK_TIMEOUT_SECONDS: float = float(
        os.getenv("INETCHECK_TIMEOUT_SECONDS", "4")
    )
    INETCHECK_INTERVAL_SECONDS: float = float(
        os.getenv("INETCHECK_INTERVAL_SECONDS", "5")
    )
    # optional YAML file replacing the default targets
    INETCHECK_TARGETS_PATH: str = os.getenv("INETCHECK_TARGETS_PATH")
    NTFY_URL: str = os.getenv("NTFY_URL")
    NTFY_TOPIC: str = os.getenv("NTFY_TOPIC")


settings = Settings()
