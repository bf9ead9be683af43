"""Failure categories surfaced to the user.

Only two kinds of failure ever reach the wizard: the diagnosis request
failed, or the report could not be written. Everything else (bad dates,
bad times, bad temperatures) falls back to defaults.
"""


class TTMError(Exception):
    """Base class for wizard errors."""


class AnalysisFailedError(TTMError):
    """The diagnosis could not be obtained.

    Covers a missing credential, transport or authentication errors from the
    Gemini SDK, blocked or empty responses, unparsable JSON and payloads that
    do not match the response schema.
    """


class ReportExportError(TTMError):
    """The report file could not be produced."""
