"""
Purge queue API URLs.
"""

from django.urls import path
from . import views

app_name = 'fastly_purger'

urlpatterns = [
    path('queue/', views.queue_invalidations, name='queue'),
]
