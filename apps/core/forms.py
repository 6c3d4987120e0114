"""
Request payload forms for the JSON API.

Bodies are bound to ordinary Django forms: multipart posts as request.POST,
JSON posts as the decoded object. `cleaned_or_raise` turns the first invalid
field into the engine error the view layer already renders.
"""
from django import forms

from .exceptions import InvalidPayloadError

TYPE_ERROR = 'type'


class PayloadForm(forms.Form):
    """
    Base form for API payloads.

    Django's fields expect strings, so a JSON number, list or object in a
    declared field is recorded as a field error instead of being cleaned.
    `field_errors` maps a field name to the ReservationEngineError subclass
    raised when that field is invalid; anything unmapped, and any wrongly
    typed value, is an InvalidPayloadError.
    """
    field_errors = {}

    def __init__(self, data=None, files=None, **kwargs):
        self._mistyped = []
        if data is not None and not hasattr(data, 'getlist'):
            data = dict(data)
            for name in self.base_fields:
                value = data.get(name)
                if value is not None and not isinstance(value, str):
                    self._mistyped.append(name)
                    data[name] = ''
        super().__init__(data, files, **kwargs)

    def clean(self):
        cleaned_data = super().clean()
        for name in self._mistyped:
            self.add_error(name, forms.ValidationError('Expected a string.', code=TYPE_ERROR))
        return cleaned_data

    def cleaned_or_raise(self) -> dict:
        if self.is_valid():
            return self.cleaned_data

        name, errors = next(iter(self.errors.as_data().items()))
        mistyped = [error for error in errors if error.code == TYPE_ERROR]
        if mistyped:
            error_class, error = InvalidPayloadError, mistyped[0]
        else:
            error_class, error = self.field_errors.get(name, InvalidPayloadError), errors[0]
        raise error_class(f"{name}: {error.messages[0]}")
