"""LiveWire factory with logging configured from settings."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from livewire.config import Settings, settings as default_settings
from livewire.engine.config import LiveWireConfig
from livewire.engine.livewire import LiveWire
from livewire.image import ImageBuffer

_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or default_settings
    logging.basicConfig(
        level=getattr(logging, settings.livewire_log_level.upper(), logging.INFO),
        format=_LOG_FORMAT,
    )


def create_livewire(
    image: ImageBuffer,
    config: LiveWireConfig | None = None,
    settings: Settings | None = None,
) -> LiveWire:
    """Build a LiveWire for ``image``, taking defaults from the environment."""
    load_dotenv()
    settings = settings or default_settings
    configure_logging(settings)
    return LiveWire(image, config=config or LiveWireConfig.from_settings(settings))
