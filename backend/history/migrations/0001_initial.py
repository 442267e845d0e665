import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="WatchHistory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("media_type", models.CharField(choices=[("movie", "Movie"), ("tv", "TV")], max_length=10)),
                ("media_id", models.CharField(max_length=255)),
                ("season_number", models.IntegerField(blank=True, null=True)),
                ("episode_number", models.IntegerField(blank=True, null=True)),
                ("episode_name", models.CharField(blank=True, max_length=255, null=True)),
                ("watched_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="watch_history",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "watch history",
                "ordering": ["-watched_at"],
            },
        ),
        migrations.AddConstraint(
            model_name="watchhistory",
            constraint=models.UniqueConstraint(
                fields=("user", "media_type", "media_id"),
                name="unique_watch_history_per_title",
            ),
        ),
    ]
