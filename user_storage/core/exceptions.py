"""
Exception hierarchy for user-storage.

Driver errors (sqlalchemy.exc.*) are never wrapped; only conditions the
repository detects itself are raised from here.
"""


class UserStorageError(Exception):
    """Base exception for user-storage"""
    pass


class RowsAffectedError(UserStorageError):
    """
    Raised when a write touched a number of rows other than exactly one.

    Attributes:
        operation: Past-tense verb of the write ("updated", "deleted")
        rows_affected: Row count reported by the driver
    """

    def __init__(self, operation: str, rows_affected: int):
        self.operation = operation
        self.rows_affected = rows_affected
        super().__init__(f"{rows_affected} users {operation}")
