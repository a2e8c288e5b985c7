"""Engine settings, read from the environment by the console app."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum

ENV_GLYPHS = "PUZZLE_ENGINE_GLYPHS"
ENV_LOG_LEVEL = "PUZZLE_ENGINE_LOG_LEVEL"


class GlyphSet(StrEnum):
    """How pieces are drawn by the text board dump."""

    UNICODE = "unicode"
    ASCII = "ascii"


@dataclass(frozen=True, slots=True)
class EngineSettings:
    glyphs: GlyphSet = GlyphSet.UNICODE
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineSettings:
        env = os.environ if environ is None else environ
        glyphs = env.get(ENV_GLYPHS, GlyphSet.UNICODE.value).strip().lower()
        try:
            glyph_set = GlyphSet(glyphs)
        except ValueError:
            raise ValueError(f"Invalid {ENV_GLYPHS}: {glyphs!r}") from None
        return cls(
            glyphs=glyph_set,
            log_level=env.get(ENV_LOG_LEVEL, "WARNING").strip().upper(),
        )
