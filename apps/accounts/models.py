"""
User model: one login per person, with a fixed role.

  admin     closes and re-opens slots, sees the full overview
  client    books and cancels its own reservations
  operator  reads reservations, packing lists and the client directory
"""
from django.contrib.auth.models import AbstractUser
from django.db import models


class Role(models.TextChoices):
    ADMIN    = 'admin',    'Admin'
    CLIENT   = 'client',   'Client'
    OPERATOR = 'operator', 'Operator'


class User(AbstractUser):
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.CLIENT, db_index=True)
    display_name = models.CharField(max_length=120)
    company_name = models.CharField(max_length=200, blank=True)
    phone = models.CharField(max_length=30, blank=True)

    class Meta:
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['username']

    def __str__(self):
        return f"{self.display_name or self.username} ({self.role})"
