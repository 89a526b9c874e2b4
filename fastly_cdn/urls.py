"""
Fastly API URLs.
"""

from django.urls import path
from . import views

app_name = 'fastly_cdn'

urlpatterns = [
    path('state/', views.fastly_state, name='state'),
    path('credentials/validate/', views.validate_credentials, name='validate_credentials'),
    path('services/', views.services_list, name='services'),
    path('purge/all/', views.purge_all, name='purge_all'),
    path('purge/url/', views.purge_url, name='purge_url'),
    path('purge/keys/', views.purge_keys, name='purge_keys'),
    path('purge/tags/', views.purge_tags, name='purge_tags'),
]
