from django.urls import path
from . import views

app_name = 'dashboard'

urlpatterns = [
    path('admin/overview/', views.overview,         name='overview'),
    path('reservations/',   views.reservation_list, name='reservation_list'),
    path('clients/',        views.client_list,      name='client_list'),
]
