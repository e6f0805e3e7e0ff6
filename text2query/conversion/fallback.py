from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field

from text2query.core.constants import Dialect


class FallbackEntry(BaseModel):
    """Canned query returned when the model call cannot be completed"""

    model_config = ConfigDict(frozen=True)

    dialect: Dialect
    sample_query: str = Field(..., min_length=1)


# Placeholder content, unrelated to the user's request
FALLBACK_CATALOG: Mapping[Dialect, FallbackEntry] = MappingProxyType({
    Dialect.SQL: FallbackEntry(
        dialect=Dialect.SQL,
        sample_query=(
            "SELECT * FROM users WHERE registration_date >= "
            "DATE_SUB(CURDATE(), INTERVAL 30 DAY)"
        ),
    ),
    Dialect.MONGODB: FallbackEntry(
        dialect=Dialect.MONGODB,
        sample_query=(
            "db.users.find({ registration_date: { $gte: "
            "new Date(new Date().setDate(new Date().getDate() - 30)) } })"
        ),
    ),
})


def lookup(dialect: Dialect, catalog: Mapping[Dialect, FallbackEntry] = FALLBACK_CATALOG) -> str:
    return catalog[dialect].sample_query
