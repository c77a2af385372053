import os
from pathlib import Path
from dotenv import load_dotenv

from ideacoach.constants import CONNECT_TIMEOUT, DEFAULT_BASE_URL, DEFAULT_MODEL, TRANSFER_TIMEOUT

class Config:
    def __init__(self):
        # Load appropriate .env file based on environment
        self.env = os.getenv("IDEACOACH_ENV", "dev")
        self._load_env_file()

        # Google AI settings
        self.google_ai_api_key = os.getenv("GOOGLE_AI_API_KEY")
        self.google_ai_model = os.getenv("GOOGLE_AI_MODEL", DEFAULT_MODEL)
        self.google_ai_base_url = os.getenv("GOOGLE_AI_BASE_URL", DEFAULT_BASE_URL)

        # Network budget (seconds)
        self.connect_timeout = float(os.getenv("AI_CONNECT_TIMEOUT", CONNECT_TIMEOUT))
        self.transfer_timeout = float(os.getenv("AI_TRANSFER_TIMEOUT", TRANSFER_TIMEOUT))

        # Logging settings
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.log_format = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def _load_env_file(self):
        """Load the appropriate .env file based on the environment."""
        env_file = ".env"

        # Check for environment-specific .env file
        if self.env != "dev":
            env_specific_file = f".env.{self.env}"
            if Path(env_specific_file).exists():
                env_file = env_specific_file
                print(f"Loading environment from {env_file}")
            else:
                print(f"Warning: {env_specific_file} not found, falling back to .env")

        # Load the environment file
        load_dotenv(env_file)

# Create a global config instance
config = Config()
