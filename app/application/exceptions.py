class CatalogUpstreamError(RuntimeError):
    """Raised when the catalog backend fails (timeouts, network errors, service unavailable)."""
    pass


class CatalogContractError(RuntimeError):
    """Raised when the catalog backend returns a payload that is not a list of service records."""
    pass


class SubmissionUpstreamError(RuntimeError):
    """Raised when the service-request backend fails to accept a submission."""
    pass


class SubmissionContractError(RuntimeError):
    """Raised when the service-request backend answers without a request identifier."""
    pass


class SessionNotFoundError(KeyError):
    """Raised when a selection session id is unknown or already discarded."""
    pass
