"""Application error types."""


class ConfigurationError(RuntimeError):
    """A required setting is missing or unusable."""


class MigrationError(RuntimeError):
    """A data migration failed while mutating the database."""

    def __init__(self, migration: str, cause: BaseException):
        super().__init__(f"{migration}: {cause}")
        self.migration = migration
        self.cause = cause
