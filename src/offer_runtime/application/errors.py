class InvalidPayloadError(ValueError):
    """Raised when an ingestion payload does not carry the expected offer list."""


class InvalidQueryError(ValueError):
    pass


class DuplicateOfferError(Exception):
    """Raised by a store when an offer with the same adjustment_id already exists."""

    def __init__(self, adjustment_id: str) -> None:
        super().__init__(f"Offer already exists for adjustment_id={adjustment_id}")
        self.adjustment_id = adjustment_id


class StoreConfigurationError(Exception):
    pass
