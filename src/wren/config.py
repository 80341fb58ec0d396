"""Application configuration.

AppConfig and QueryConfig are frozen dataclasses — immutable after
creation, IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class QueryConfig:
    """How the query binder decodes ``?name=value`` pairs.

    Defaults follow standard form encoding. Override for legacy clients::

        QueryConfig(encoding="latin-1", separator=";")
    """

    encoding: str = "utf-8"
    errors: str = "replace"  # codec error handler for undecodable bytes
    separator: str = "&"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, query=QueryConfig(separator=";"))
    """

    debug: bool = False

    # Install QueryParser automatically as the first middleware
    parse_query: bool = True
    query: QueryConfig = field(default_factory=QueryConfig)
