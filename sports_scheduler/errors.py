"""Domain errors raised by the service layer.

Routes catch ``SchedulerError`` and turn ``messages`` into flash notices; none
of these are meant to reach the generic 500 handler.
"""


class SchedulerError(Exception):
    default_message = 'Something went wrong'

    def __init__(self, *messages):
        self.messages = [str(m) for m in messages if m] or [self.default_message]
        super().__init__(*self.messages)

    @property
    def message(self):
        return '; '.join(self.messages)


class ValidationError(SchedulerError):
    """One message per violated field rule."""
    default_message = 'Invalid input'


class ConflictError(SchedulerError):
    default_message = 'Email already in use'


class InvalidCredentials(SchedulerError):
    default_message = 'Invalid email or password'


class Unauthorized(SchedulerError):
    default_message = 'Not authorized'


class NotFound(SchedulerError):
    default_message = 'Not found'


class AlreadyJoined(SchedulerError):
    default_message = 'Already joined'


class SessionInPast(SchedulerError):
    default_message = 'Cannot join a past session'


class CSRFError(SchedulerError):
    default_message = 'Invalid CSRF token. Please try again.'
