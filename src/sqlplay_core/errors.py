"""Exception hierarchy for sqlplay-core."""


class SqlPlayError(Exception):
    """Base class for all sqlplay-core errors."""


class ParseError(SqlPlayError, ValueError):
    """Question text is missing or has no recognizable table header."""


class ValidationError(SqlPlayError, ValueError):
    """A parsed question failed a post-parse consistency check."""


class WarehouseError(SqlPlayError):
    """A warehouse operation could not be carried out."""
