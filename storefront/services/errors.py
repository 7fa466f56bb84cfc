"""
Service layer exceptions.
"""


class StoreNotFoundError(Exception):
    """Raised when no merchant store has the given code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Merchant store not found: {code}")


class DuplicateStoreError(Exception):
    """Raised when a merchant store code is already taken."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Merchant store already exists: {code}")
