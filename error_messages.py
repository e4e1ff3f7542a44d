# error_messages.py
"""
User-friendly error messages and exception types for the layout engine.
"""


class ErrorMessages:
    """Centralized error message definitions with recovery suggestions."""

    INVALID_EVENT = {
        'title': 'Invalid Event',
        'message': 'An event has a missing, unparsable or reversed time range and was skipped.',
        'suggestions': [
            'Check the start and end timestamps of the event',
            'Timestamps must be ISO-8601 strings',
            'The end of an event must not be before its start'
        ],
        'code': 'EVENT_001'
    }

    INVALID_AXIS = {
        'title': 'Invalid Time Axis',
        'message': 'The visible time axis is empty or outside a single day.',
        'suggestions': [
            'Axis hours must lie between 0 and 24',
            'The axis start hour must be before the axis end hour'
        ],
        'code': 'CONFIG_001'
    }

    INVALID_CONFIGURATION = {
        'title': 'Invalid Configuration',
        'message': 'The layout configuration contains invalid data.',
        'suggestions': [
            'Check the minimum visible fraction and column gutter values',
            'Check the start day of the week',
            'Remove the settings file to fall back to defaults'
        ],
        'code': 'CONFIG_002'
    }

    UNKNOWN_VIEW = {
        'title': 'Unknown View',
        'message': 'The requested calendar view or navigation action does not exist.',
        'suggestions': [
            'Use one of "day", "week" or "month"',
            'Use one of "PREV", "NEXT" or "TODAY" for navigation'
        ],
        'code': 'VIEW_001'
    }

    UNEXPECTED_ERROR = {
        'title': 'Unexpected Error',
        'message': 'An unexpected error has occurred.',
        'suggestions': [
            'Try the operation again',
            'Report this issue with error details'
        ],
        'code': 'APP_002'
    }

    @staticmethod
    def get_message(error_type):
        """
        Get error message details by error type.

        Args:
            error_type (str): The error type constant name

        Returns:
            dict: Error message details with title, message, suggestions, and code
        """
        return getattr(ErrorMessages, error_type, ErrorMessages.UNEXPECTED_ERROR)

    @staticmethod
    def format_suggestions(suggestions):
        """
        Format suggestion list for display.

        Args:
            suggestions (list): List of suggestion strings

        Returns:
            str: Formatted suggestions string
        """
        if not suggestions:
            return ""

        if len(suggestions) == 1:
            return f"Suggestion: {suggestions[0]}"

        formatted = "Suggestions:\n"
        for i, suggestion in enumerate(suggestions, 1):
            formatted += f"{i}. {suggestion}\n"

        return formatted.strip()


class CalendarError(Exception):
    """Base exception class for calendar-specific errors."""

    def __init__(self, message, error_code=None, suggestions=None):
        super().__init__(message)
        self.error_code = error_code
        self.suggestions = suggestions or []

    @classmethod
    def from_message(cls, error_type, detail=None):
        """Build the exception from an ErrorMessages entry."""
        info = ErrorMessages.get_message(error_type)
        message = info['message'] if detail is None else f"{info['message']} ({detail})"
        return cls(message, error_code=info['code'], suggestions=list(info['suggestions']))


class InvalidEventError(CalendarError):
    """Exception for event records that cannot be laid out."""
    pass


class SettingsError(CalendarError):
    """Exception for settings and configuration errors."""
    pass
