from django import forms

from apps.core.exceptions import InvalidAttachmentError
from apps.core.forms import PayloadForm


class BookingForm(PayloadForm):
    """
    Multipart booking request. Only shape is checked here; the booking
    rules (horizon, weekday, window, attachment type and size) stay in
    attempt_book so they are reported in their fixed order.
    """
    date = forms.DateField(input_formats=['%Y-%m-%d'])
    startTime = forms.TimeField(input_formats=['%H:%M'])
    containerNo = forms.CharField(max_length=64)
    packingList = forms.FileField(required=False)

    field_errors = {'packingList': InvalidAttachmentError}


class CancelForm(PayloadForm):
    reason = forms.CharField(required=False, max_length=500)
