# booking/exceptions.py
#
# Errors raised by the availability engine.
#
# "No availability" is never an error: closed days, vacations and fully
# booked days come back as False / an empty list. These exceptions are for
# inputs the engine cannot work with at all.


class AvailabilityError(Exception):
    """Base class for availability engine errors."""


class InvalidInput(AvailabilityError, ValueError):
    """
    Malformed date/time/duration input.
    The engine never guesses; normalizing input is the caller's job.
    """


class InvalidReference(AvailabilityError, LookupError):
    """
    Unknown staff/salon/service, or an empty schedule where one was expected.
    """
