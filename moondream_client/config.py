from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from moondream_client.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_IMAGE_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIMEOUT,
)


@dataclass(frozen=True)
class Config:
    api_key: str
    base_url: str
    timeout: float
    image_format: str
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        api_key = os.getenv("MOONDREAM_API_KEY")
        base_url = os.getenv("MOONDREAM_BASE_URL") or DEFAULT_BASE_URL
        timeout = os.getenv("MOONDREAM_TIMEOUT") or str(DEFAULT_TIMEOUT)
        image_format = os.getenv("MOONDREAM_IMAGE_FORMAT") or DEFAULT_IMAGE_FORMAT
        log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)

        return cls._validate(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            image_format=image_format,
            log_level=log_level,
        )

    @staticmethod
    def _validate(
        api_key: Optional[str],
        base_url: str,
        timeout: str,
        image_format: str,
        log_level: str,
    ) -> "Config":
        match api_key:
            case None | "":
                raise ValueError("MOONDREAM_API_KEY must be set in .env")
            case _:
                pass

        try:
            seconds = float(timeout)
        except ValueError:
            raise ValueError(f"MOONDREAM_TIMEOUT must be a number, got {timeout!r}") from None

        return Config(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            timeout=seconds,
            image_format=image_format.upper(),
            log_level=log_level,
        )
