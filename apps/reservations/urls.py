"""
Reservation URLs.

  /api/client/reservations/                       grid + own list (GET), book (POST)
  /api/client/reservations/<uuid>/cancel/         cancel own reservation
  /api/reservations/<uuid>/packing-list/          packing-list download
"""
from django.urls import path
from . import views

app_name = 'reservations'

urlpatterns = [
    path('client/reservations/',                           views.client_reservations, name='client_reservations'),
    path('client/reservations/<uuid:reservation_id>/cancel/', views.cancel_reservation, name='cancel'),
    path('reservations/<uuid:reservation_id>/packing-list/', views.packing_list,       name='packing_list'),
]
