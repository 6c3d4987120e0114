from django.urls import path
from . import views

app_name = 'closures'

urlpatterns = [
    path('',                        views.closures,     name='closures'),
    path('<uuid:closure_id>/open/', views.open_closure, name='open'),
]
