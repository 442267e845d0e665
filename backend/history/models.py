from django.conf import settings
from django.db import models
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class WatchHistory(models.Model):
    class MediaType(models.TextChoices):
        MOVIE = "movie", "Movie"
        TV = "tv", "TV"

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="watch_history"
    )

    media_type = models.CharField(max_length=10, choices=MediaType.choices)
    media_id = models.CharField(max_length=255)

    # Only set for TV playback
    season_number = models.IntegerField(null=True, blank=True)
    episode_number = models.IntegerField(null=True, blank=True)
    episode_name = models.CharField(max_length=255, null=True, blank=True)

    watched_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "media_type", "media_id"],
                name="unique_watch_history_per_title",
            ),
        ]
        ordering = ["-watched_at"]
        verbose_name_plural = "watch history"

    def __str__(self):
        return f"{self.user} - {self.media_type}/{self.media_id}"
