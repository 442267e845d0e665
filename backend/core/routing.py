from django.urls import path
from playback.consumers import PlaybackConsumer

websocket_urlpatterns = [
    path("ws/playback/", PlaybackConsumer.as_asgi()),
    path("ws/v1/playback/", PlaybackConsumer.as_asgi()),
]
