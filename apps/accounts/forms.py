from django import forms

from apps.core.forms import PayloadForm


class LoginForm(PayloadForm):
    username = forms.CharField(max_length=150)
    password = forms.CharField(strip=False)
