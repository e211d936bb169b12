"""Configuration management for the itinerary exporter."""
import logging
import os

from dotenv import load_dotenv

load_dotenv()


def get_openai_api_key() -> str:
    """OpenAI API key from the environment; empty when unset."""
    return os.getenv("OPENAI_API_KEY", "")


def get_openai_model() -> str:
    return os.getenv("OPENAI_MODEL", "gpt-4o-mini")


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def configure_logging() -> None:
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
