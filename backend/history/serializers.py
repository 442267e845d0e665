from rest_framework import serializers

from .models import WatchHistory


class WatchHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = WatchHistory
        fields = [
            "media_type",
            "media_id",
            "season_number",
            "episode_number",
            "episode_name",
            "watched_at",
        ]
        read_only_fields = fields
