"""
Custom exceptions for the reservation engine.
Raised by the guards in reservations/closures and caught at the view layer,
where `code` and `status` become the JSON error response.
"""


class ReservationEngineError(Exception):
    """Base exception for all reservation engine errors."""
    code = 'error'
    status = 400
    default_message = 'The request could not be completed.'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class InvalidRangeError(ReservationEngineError):
    """Raised when a date range or time range is missing, malformed or reversed."""
    code = 'invalid_range'
    default_message = 'Invalid date or time range.'


class OutOfWindowError(ReservationEngineError):
    """Raised when the requested date is not within the rolling booking horizon."""
    code = 'out_of_window'
    default_message = 'Reservations can only be made from tomorrow up to 14 days ahead.'


class NotBookableError(ReservationEngineError):
    """Raised when the requested date falls on a fixed closed weekday."""
    code = 'not_bookable'
    default_message = 'The warehouse does not take deliveries on this day.'


class InvalidWindowError(ReservationEngineError):
    """Raised when start_time is not one of the fixed delivery windows."""
    code = 'invalid_window'
    default_message = 'Invalid start time.'


class InvalidAttachmentError(ReservationEngineError):
    """Raised when the packing list is missing, too large, of the wrong type, or badly referenced."""
    code = 'invalid_attachment'
    default_message = 'A packing list (PDF, DOC or DOCX, at most 10 MB) is required.'


class InvalidPayloadError(ReservationEngineError):
    """Raised when a required request field is absent."""
    code = 'invalid_payload'
    default_message = 'Invalid payload.'


class MissingReasonError(ReservationEngineError):
    code = 'missing_reason'
    default_message = 'A reason is required.'


class TooLateToCancelError(ReservationEngineError):
    code = 'too_late_to_cancel'
    default_message = 'Reservations cannot be cancelled on the delivery day.'


class SlotClosedError(ReservationEngineError):
    """Raised when an active closure covers the requested window."""
    code = 'slot_closed'
    status = 409
    default_message = 'This time slot has been closed by the warehouse.'


class SlotTakenError(ReservationEngineError):
    """Raised when a booked reservation already overlaps the requested window."""
    code = 'slot_taken'
    status = 409
    default_message = 'This time slot is already booked.'


class HasBookingsError(ReservationEngineError):
    """Raised when a closure would cover existing booked reservations."""
    code = 'has_bookings'
    status = 409
    default_message = 'The selected date or time range already has reservations.'


class NotFoundError(ReservationEngineError):
    """Raised for missing entities, and for entities the caller may not see."""
    code = 'not_found'
    status = 404
    default_message = 'Not found.'


class UnauthorizedError(ReservationEngineError):
    code = 'unauthorized'
    status = 401
    default_message = 'Unauthorized.'
