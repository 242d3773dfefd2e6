from clients.lms_admin_sdk.errors import STATUS_CODES, ApiError

SUGGESTIONS = {
    "UNAUTHORIZED": "Sign in again and retry.",
    "PERMISSION_DENIED": "Ask a platform administrator for access.",
    "NOT_FOUND": "Refresh the list; the record may have been removed.",
    "VALIDATION_ERROR": "Review the required fields and their format.",
    "CONFLICT": "Refresh the list and check the current state before retrying.",
    "TIMEOUT_ERROR": "Press 'r' to refresh once the connection is back.",
    "NETWORK_ERROR": "Check the network or VPN and refresh manually.",
    "INTERNAL_ERROR": "Refresh in a few seconds and share the trace_id if it persists.",
}
DEFAULT_SUGGESTION = "Contact support with the trace_id."


def bucket_for(error: ApiError) -> str:
    status = error.status_code
    if status in STATUS_CODES:
        return STATUS_CODES[status]
    if status is not None and status >= 500:
        return "INTERNAL_ERROR"
    return error.code


class ErrorMapper:
    @classmethod
    def to_payload(cls, error: Exception) -> dict:
        """Banner payload; the backend message is kept verbatim."""
        if not isinstance(error, ApiError):
            return {
                "code": "INTERNAL_ERROR",
                "message": str(error),
                "details": None,
                "trace_id": None,
                "suggestion": "Refresh and report the incident if it persists.",
            }
        code = bucket_for(error)
        return {
            "code": code,
            "message": error.message,
            "details": error.details,
            "trace_id": error.trace_id,
            "suggestion": SUGGESTIONS.get(code, DEFAULT_SUGGESTION),
        }
