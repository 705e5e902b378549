from django.urls import path, include

urlpatterns = [
    path('', include('reps.urls')),
]
