from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from core.api_response import error_from, success
from core.exceptions import InvalidRequestError, UnknownProviderError
from providers.base import PlaybackRequest
from providers.registry import available_providers, default_key, describe
from providers.sandbox import build_embed_view
from providers.serializers import ProviderSerializer


@api_view(["GET"])
def providers_view(request):
    serializer = ProviderSerializer(
        available_providers(),
        many=True,
        context={"default": default_key()},
    )
    return Response(success(serializer.data))


@api_view(["GET"])
def embed_view(request):
    params = request.query_params

    try:
        descriptor = describe(params.get("provider") or default_key())
    except UnknownProviderError as exc:
        return Response(error_from(exc), status=status.HTTP_404_NOT_FOUND)

    try:
        playback_request = PlaybackRequest.parse(
            media_type=params.get("media_type"),
            media_id=params.get("media_id"),
            season=params.get("season"),
            episode=params.get("episode"),
        )
        view = build_embed_view(descriptor, playback_request)
    except InvalidRequestError as exc:
        return Response(error_from(exc), status=status.HTTP_400_BAD_REQUEST)

    return Response(success(view.to_dict()))
