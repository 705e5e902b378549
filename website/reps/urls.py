from django.urls import path

from . import views

urlpatterns = [
    path('reps', views.reps_lookup, name='reps_lookup'),
    path('sync-reps', views.sync_reps, name='sync_reps'),
]
