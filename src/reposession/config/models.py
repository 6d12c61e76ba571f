"""Pydantic models describing repo-session configuration."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RepoSessionConfig(BaseModel):
    """Root configuration object: where to look and how to launch."""

    model_config = ConfigDict(extra="allow")

    search_paths: List[Optional[str]] = Field(default_factory=list)
    nested: bool = False
    max_workers: Optional[int] = Field(default=None, ge=1)
    log_file: Optional[Path] = None
    selector_command: List[str] = Field(default_factory=lambda: ["fzf"])

    @field_validator("search_paths", mode="before")
    @classmethod
    def _none_means_empty(cls, value: object) -> object:
        """A bare ``search_paths:`` key in YAML parses as null."""

        return [] if value is None else value

    @field_validator("selector_command")
    @classmethod
    def _require_command(cls, value: List[str]) -> List[str]:
        if not value or not value[0].strip():
            raise ValueError("selector_command must name an executable.")
        return value


__all__ = ["RepoSessionConfig"]
