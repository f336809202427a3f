from flask import flash


def flash_errors(error):
    """Queue every message carried by a ``SchedulerError`` as an error notice."""
    for message in error.messages:
        flash(message, 'error')
