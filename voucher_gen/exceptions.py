"""Custom exception hierarchy for voucher-gen."""


class VoucherGenError(Exception):
    """Base exception for all voucher-gen errors."""


class InvalidSelectionError(VoucherGenError, ValueError):
    """Raised when a denomination selection or network is not acceptable."""


class GenerationError(VoucherGenError):
    """Raised when unique card codes could not be produced for a batch."""


class EntityNotFoundError(VoucherGenError):
    """Raised when a referenced entity does not exist."""


class CardNotFoundError(EntityNotFoundError):
    """Raised when a card id is unknown to the inventory ledger."""


class InvalidEntityStateError(VoucherGenError):
    """Raised when an entity is in an invalid state for the operation."""


class InvalidStatusTransitionError(InvalidEntityStateError):
    """Raised when a card status would move backwards or skip a step."""


class WorkflowStateError(VoucherGenError):
    """Raised when a print session operation is called in the wrong stage."""


class LedgerError(VoucherGenError):
    """Raised when a ledger write is rejected or cannot be completed."""


class PrintCommitError(VoucherGenError):
    """Raised when a batch could not be committed as printed."""


class ConfigurationError(VoucherGenError):
    """Raised when configuration is invalid or missing."""


class SinkError(VoucherGenError):
    """Raised when a sink operation fails."""
