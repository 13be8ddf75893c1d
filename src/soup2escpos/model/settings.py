from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

__all__ = ["EncoderSettings"]


@dataclass(frozen=True)
class EncoderSettings:
    """
    Run-wide, read-only settings shared by the tokenizer and tag producers.

    Attributes:
        text_encoding: Codec used to turn character data into printer bytes
        paper_width_inches: Printable width used to bound raster image width
    """

    text_encoding: str = "utf-8"
    paper_width_inches: int = 2

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "EncoderSettings":
        """Build settings from a ``load_config()`` dictionary."""
        return cls(
            text_encoding=str(config.get("text_encoding", cls.text_encoding)),
            paper_width_inches=int(config.get("paper_width_inches", cls.paper_width_inches)),
        )
