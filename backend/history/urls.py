from django.urls import path
from .views import last_watched_view

urlpatterns = [
    path("last-watched/", last_watched_view),
]
