"""
Pipeline Configuration

Paths, rotation offset and gateway credentials, resolved from the
environment (and .env) once and passed explicitly to the pipeline.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from tamboon.cipher.rot128 import DEFAULT_OFFSET, normalize_offset
from tamboon.coreutils.env import env_get, env_get_float, env_get_int

DEFAULT_DATA_DIR = "data"
DEFAULT_ENCRYPTED_FILE = "fng.1000.csv.rot128"
DEFAULT_CURRENCY = "thb"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the donation pipeline"""

    data_dir: Path = Path(DEFAULT_DATA_DIR)
    encrypted_file: str = DEFAULT_ENCRYPTED_FILE
    decrypted_file: Optional[str] = None
    rotation_offset: int = DEFAULT_OFFSET
    currency: str = DEFAULT_CURRENCY
    request_delay: float = 0.0
    omise_public_key: Optional[str] = None
    omise_secret_key: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "data_dir", Path(self.data_dir))
        object.__setattr__(
            self, "rotation_offset", normalize_offset(self.rotation_offset)
        )
        object.__setattr__(self, "currency", self.currency.lower())

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """Build settings from TAMBOON_* and OMISE_* variables.

        Keyword overrides that are not None win over the environment.
        """
        settings = cls(
            data_dir=Path(env_get("TAMBOON_DATA_DIR", DEFAULT_DATA_DIR)),
            encrypted_file=env_get("TAMBOON_ENCRYPTED_FILE", DEFAULT_ENCRYPTED_FILE),
            rotation_offset=env_get_int("TAMBOON_ROTATION_OFFSET", DEFAULT_OFFSET),
            currency=env_get("TAMBOON_CURRENCY", DEFAULT_CURRENCY),
            request_delay=env_get_float("TAMBOON_REQUEST_DELAY", 0.0),
            omise_public_key=env_get("OMISE_PUBLIC_KEY"),
            omise_secret_key=env_get("OMISE_SECRET_KEY"),
        )
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(settings, **overrides) if overrides else settings

    @property
    def encrypted_path(self) -> Path:
        return self.data_dir / self.encrypted_file

    @property
    def decrypted_path(self) -> Path:
        """Output path for the decoded CSV (defaults to the input minus .rot128)"""
        if self.decrypted_file:
            return self.data_dir / self.decrypted_file
        name = self.encrypted_file
        if name.endswith(".rot128"):
            name = name[: -len(".rot128")]
        else:
            name = f"{name}.decoded"
        return self.data_dir / name
