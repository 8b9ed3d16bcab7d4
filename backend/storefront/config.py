import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_API_URL = 'http://127.0.0.1:8000'
DEFAULT_TIMEOUT = 10.0


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT


def load_config():
    """Configuración del cliente desde variables de entorno (.env incluido)"""
    load_dotenv()

    api_url = os.getenv('STOREFRONT_API_URL', DEFAULT_API_URL).strip()
    if not api_url.startswith(('http://', 'https://')):
        raise ConfigError(f"STOREFRONT_API_URL must be an http(s) URL, got {api_url!r}")

    raw_timeout = os.getenv('STOREFRONT_TIMEOUT', str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigError(f"STOREFRONT_TIMEOUT must be a number, got {raw_timeout!r}") from None
    if timeout <= 0:
        raise ConfigError("STOREFRONT_TIMEOUT must be positive")

    return ClientConfig(api_url=api_url.rstrip('/'), timeout=timeout)
