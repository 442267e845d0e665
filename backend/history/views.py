from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.api_response import error, error_from
from core.exceptions import InvalidRequestError
from providers.base import MediaKind

from .serializers import WatchHistorySerializer
from .services import find_last_watched


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def last_watched_view(request):
    media_type = request.query_params.get("media_type")
    media_id = request.query_params.get("media_id")

    if not media_type or not media_id:
        return Response(
            error("invalid_request", "media_type and media_id required"),
            status=status.HTTP_400_BAD_REQUEST,
        )

    try:
        kind = MediaKind.parse(media_type)
    except InvalidRequestError as exc:
        return Response(error_from(exc), status=status.HTTP_400_BAD_REQUEST)

    entry = find_last_watched(request.user.pk, kind, media_id)

    if entry is None:
        return Response({"history": None}, status=200)

    serializer = WatchHistorySerializer(entry)
    return Response({"history": serializer.data}, status=200)
