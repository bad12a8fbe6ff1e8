class EigenDAError(Exception):
    """
    Base class for all EigenDA SDK errors.

    This exception serves as the root of the EigenDA SDK error hierarchy.
    """
    pass


class ConfigurationError(EigenDAError):
    """
    Raised when the client cannot be constructed from the given settings.

    Examples include a malformed URL, private key or contract address, or
    no signing credential at all. Never worth retrying.
    """
    pass


class InvalidParameterError(EigenDAError):
    """
    Raised when a provided parameter is invalid or malformed.

    This indicates that the arguments passed to a method do not meet
    the expected criteria or format.
    """
    pass


class UploadError(EigenDAError):
    """
    Raised when an upload request fails, either in transport or because
    the service rejected it.
    """
    pass


class StatusError(EigenDAError):
    """
    Raised when a job status cannot be obtained, when the job reaches
    FAILED, or when polling runs out of checks.
    """
    pass


class RetrieveError(EigenDAError):
    """
    Raised when content cannot be retrieved.

    Examples include a transport failure, no usable addressing mode, or a
    completed job that carries no request id.
    """
    pass


class LedgerError(EigenDAError):
    """
    Raised for credit-ledger failures.

    Wraps the underlying RPC or contract error message.
    """
    pass


class TransactionError(LedgerError):
    """
    Raised when an on-chain transaction cannot be sent or mined.

    Attributes:
        tx_hash: Optional blockchain transaction hash string associated
                 with the failed transaction.
    """

    def __init__(self, message: str, tx_hash: str | None = None):
        """
        Initialize a TransactionError.

        Args:
            message: Description of the error.
            tx_hash: Optional transaction hash for reference.
        """
        super().__init__(message)
        self.tx_hash = tx_hash
