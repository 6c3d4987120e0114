from django import forms

from apps.core.exceptions import InvalidRangeError, MissingReasonError
from apps.core.forms import PayloadForm


class ClosureForm(PayloadForm):
    """
    Close request. Fields are declared in the order attempt_close checks
    them; the mode/bounds rules themselves live in the engine.
    """
    date = forms.DateField(input_formats=['%Y-%m-%d'])
    reason = forms.CharField()
    mode = forms.CharField(required=False)
    startTime = forms.TimeField(input_formats=['%H:%M'], required=False)
    endTime = forms.TimeField(input_formats=['%H:%M'], required=False)

    field_errors = {
        'reason':    MissingReasonError,
        'startTime': InvalidRangeError,
        'endTime':   InvalidRangeError,
    }


class OpenClosureForm(PayloadForm):
    openedReason = forms.CharField()

    field_errors = {'openedReason': MissingReasonError}
