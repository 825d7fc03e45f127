"""
Error taxonomy for the resume analysis flow.

Every error carries the HTTP status and the message returned to the caller as
``{"error": message}``. None of them are retried.
"""

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
QUOTA_EXHAUSTED_MESSAGE = "AI credits exhausted. Please add credits to continue."


class ResumeAnalyzerError(Exception):
    status_code = 500
    default_message = "An unknown error occurred"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ResumeAnalyzerError):
    status_code = 401
    default_message = "Unauthorized"


class RateLimited(ResumeAnalyzerError):
    status_code = 429
    default_message = RATE_LIMIT_MESSAGE


class QuotaExhausted(ResumeAnalyzerError):
    status_code = 402
    default_message = QUOTA_EXHAUSTED_MESSAGE


class UpstreamFailure(ResumeAnalyzerError):
    default_message = "AI analysis failed"


class MalformedResponse(ResumeAnalyzerError):
    default_message = "Invalid AI response format"


class PersistenceFailure(ResumeAnalyzerError):
    default_message = "Failed to store analysis"


class ConfigurationError(ResumeAnalyzerError):
    default_message = "Service is not configured"


class UploadRejected(ResumeAnalyzerError):
    status_code = 400
    default_message = "Invalid upload"


class UploadFailure(ResumeAnalyzerError):
    default_message = "Failed to upload resume"


class NotFound(ResumeAnalyzerError):
    status_code = 404
    default_message = "Not found"
