from django.contrib import admin
from .models import WatchHistory


@admin.register(WatchHistory)
class WatchHistoryAdmin(admin.ModelAdmin):
    list_display = (
        "user",
        "media_type",
        "media_id",
        "season_number",
        "episode_number",
        "watched_at",
    )
    search_fields = ("media_id", "episode_name")
    list_filter = ("media_type",)
