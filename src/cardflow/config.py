"""Configuration loader for cardflow."""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING

import tomlkit
from pydantic import BaseModel, Field, field_validator

from cardflow.atomic import atomic_write
from cardflow.core.engine import DEFAULT_COLUMNS, create_board
from cardflow.core.ids import DEFAULT_ID_PREFIX
from cardflow.core.models.enums import IdStrategy, coerce_id_strategy
from cardflow.limits import DEBUG_BUILD, MAX_CONTENT_LENGTH
from cardflow.paths import get_config_path

if TYPE_CHECKING:
    from pathlib import Path

    from cardflow.core.models.entities import Board


class GeneralConfig(BaseModel):
    """General configuration settings."""

    id_strategy: IdStrategy = Field(
        default=IdStrategy.COUNTER, description="Card id generator: counter or uuid"
    )
    id_prefix: str = Field(default=DEFAULT_ID_PREFIX, description="Prefix for counter ids")
    check_invariants: bool = Field(
        default=DEBUG_BUILD, description="Verify board invariants after every change"
    )
    max_content_length: int = Field(default=MAX_CONTENT_LENGTH, ge=1)

    @field_validator("id_strategy", mode="before")
    @classmethod
    def validate_id_strategy(cls, value: object) -> IdStrategy:
        """Gracefully coerce unknown strategies to the counter."""
        return coerce_id_strategy(value)


class ColumnConfig(BaseModel):
    """One board column."""

    id: str = Field(..., min_length=1)
    title: str

    @field_validator("id")
    @classmethod
    def strip_id(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Column id cannot be blank")
        return value


def _default_columns() -> list[ColumnConfig]:
    return [ColumnConfig(id=column_id, title=title) for column_id, title in DEFAULT_COLUMNS]


class CardflowConfig(BaseModel):
    """Root configuration model."""

    general: GeneralConfig = Field(default_factory=GeneralConfig)
    columns: list[ColumnConfig] = Field(default_factory=_default_columns, min_length=1)

    @field_validator("columns")
    @classmethod
    def validate_unique_columns(cls, value: list[ColumnConfig]) -> list[ColumnConfig]:
        seen: set[str] = set()
        for column in value:
            if column.id in seen:
                raise ValueError(f"Duplicate column id {column.id!r}")
            seen.add(column.id)
        return value

    @classmethod
    def load(cls, config_path: Path | None = None) -> CardflowConfig:
        """Load configuration from TOML file or use defaults."""
        if config_path is None:
            config_path = get_config_path()

        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)

        return cls()

    def build_board(self) -> Board:
        """Create an empty board with the configured columns."""
        return create_board((column.id, column.title) for column in self.columns)

    def save(self, path: Path) -> None:
        """Serialize current config to TOML file.

        Args:
            path: Path to write config file (created if missing)
        """
        atomic_write(path, self.dumps())

    def dumps(self) -> str:
        doc = tomlkit.document()

        general_table = tomlkit.table()
        for key, value in self.general.model_dump(mode="json").items():
            general_table[key] = value
        doc["general"] = general_table

        columns = tomlkit.aot()
        for column in self.columns:
            table = tomlkit.table()
            table["id"] = column.id
            table["title"] = column.title
            columns.append(table)
        doc["columns"] = columns

        return tomlkit.dumps(doc)
