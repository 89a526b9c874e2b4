"""
Diagnostics API URLs.
"""

from django.urls import path
from . import diagnostics_api

app_name = 'diagnostics'

urlpatterns = [
    path('', diagnostics_api.diagnostics_list, name='diagnostics_list'),
]
