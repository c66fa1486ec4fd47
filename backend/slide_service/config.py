"""
Slide service configuration.
Builds a SlideConfig from the process environment (and .env, if present).
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

# Load .env only once here
load_dotenv()

DEFAULT_MODEL = "gpt-4o-mini"


@dataclass(frozen=True)
class SlideConfig:
    """
    Settings the slide handler needs at request time.

    Attributes:
        api_key (str, optional): OpenAI secret. Missing means the service is misconfigured.
        model (str): Chat model used for extraction.
        base_url (str, optional): Alternate OpenAI-compatible endpoint.
    """
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SlideConfig":
        """
        Read OPENAI_API_KEY, MODEL and OPENAI_BASE_URL.

        Empty values are treated the same as unset ones.

        Args:
            environ (Mapping, optional): Source of variables. Defaults to os.environ.

        Returns:
            SlideConfig: The resolved configuration.
        """
        env = os.environ if environ is None else environ

        return cls(
            api_key=env.get("OPENAI_API_KEY") or None,
            model=env.get("MODEL") or DEFAULT_MODEL,
            base_url=env.get("OPENAI_BASE_URL") or None,
        )
