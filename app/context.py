"""
Service context shared across the FastAPI application lifecycle.
Built once at startup and read-only afterwards.
"""

from dataclasses import dataclass
from typing import Optional

from app.config import Settings
from app.database import Database
from app.services.assets import AssetStore, LocalAssetStore
from app.utils.auth import PasswordHasher, TokenService


@dataclass
class ServiceContext:
    """Dependency registry handed to every request through app.state."""

    settings: Settings
    database: Database
    hasher: PasswordHasher
    tokens: TokenService
    assets: AssetStore

    @classmethod
    def from_settings(cls, settings: Settings, database: Optional[Database] = None) -> "ServiceContext":
        return cls(
            settings=settings,
            database=database or Database(settings),
            hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
            tokens=TokenService(
                secret_key=settings.jwt_secret_key,
                algorithm=settings.jwt_algorithm,
                expire_hours=settings.access_token_expire_hours,
            ),
            assets=LocalAssetStore.from_settings(settings),
        )
