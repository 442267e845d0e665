from django.urls import path
from .views import embed_view, providers_view

urlpatterns = [
    path("", providers_view),
    path("embed/", embed_view),
]
