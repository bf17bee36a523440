"""
WaveTech Workshop: Configuration settings.

Loads from environment variables with sensible defaults.
"""

from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database (also backs the local preference store)
    database_url: str = "sqlite:///./wavetech.db"

    # Startup gate: remote validation endpoint
    gate_endpoint_url: str = "https://gate.example.com/server.php"
    gate_access_key: str = "Bs2675kDjkb5Ga"
    gate_verify_key: str = "GJDFHDFHFDJGSDAGKGHK"
    gate_max_attempts: int = 3
    gate_backoff_cap_seconds: float = 30.0
    gate_request_timeout_seconds: float = 10.0
    # Run the gate in the background as soon as the app starts
    gate_activate_on_startup: bool = True

    # Secure credential store (Fernet-encrypted file)
    secure_store_path: str = "./wavetech.secrets"
    # Generate with: python -c "from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())"
    # If unset, a key file is created next to secure_store_path on first use.
    encryption_key: Optional[str] = None

    # Seed one demo record per collection when the store is empty
    seed_demo_data: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Comma-separated list in .env, e.g. CORS_ORIGINS=http://localhost:3000
    cors_origins: str = ""

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
