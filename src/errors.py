"""Error taxonomy for the intake, evaluation and stage pipeline."""


class CandidatePipelineError(Exception):
    """Base class for every failure raised by the candidate pipeline."""


class MalformedInputError(CandidatePipelineError, ValueError):
    """Uploaded content or extracted fields cannot form a candidate."""


class ConfigurationError(CandidatePipelineError):
    """Required configuration for evaluation is missing (job description, API key, model)."""


class ExtractionError(CandidatePipelineError):
    """Document extraction failed (auth, quota, unreadable document)."""


class OracleUnavailableError(CandidatePipelineError):
    """The evaluation model could not be reached or returned an API error."""


class OracleEmptyResponseError(CandidatePipelineError):
    """The evaluation model returned no payload."""


class OracleMalformedResponseError(CandidatePipelineError, ValueError):
    """The evaluation payload does not match the Evaluation contract."""


class NotFoundError(CandidatePipelineError, LookupError):
    """No candidate record with the requested id."""


class InvalidStageError(CandidatePipelineError, ValueError):
    """Stage is not one of the known pipeline stages."""


class StoreIOError(CandidatePipelineError):
    """Persistence failure in the candidate store."""
