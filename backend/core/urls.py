from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/providers/", include("providers.urls")),
    path("api/history/", include("history.urls")),
]
