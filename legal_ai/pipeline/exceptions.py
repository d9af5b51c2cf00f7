class PipelineError(Exception):
    """Base exception for all pipeline-related errors."""


class AnalysisValidationError(PipelineError):
    """Raised when a request is rejected before any extraction or model call."""


class DocumentNotFoundError(PipelineError):
    """Raised when a document cannot be found in the database."""


class SourceUnavailableError(PipelineError):
    """Raised when neither an object-storage nor a local file reference resolves."""


class PersistenceError(PipelineError):
    """Raised when an analysis result cannot be written back to its document."""


class ContractNotFoundError(DocumentNotFoundError):
    """Raised when a contract record cannot be found in the database."""
