from urllib.parse import parse_qs
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed, InvalidToken, TokenError
from channels.db import database_sync_to_async


@database_sync_to_async
def get_user_from_token(token):
    authentication = JWTAuthentication()
    try:
        validated = authentication.get_validated_token(token)
        return authentication.get_user(validated)
    except (InvalidToken, TokenError, AuthenticationFailed):
        return AnonymousUser()


class JWTAuthMiddleware:
    """
    Authenticates websocket connections from a ``?token=`` query parameter.
    Without a token the scope is left for the session middleware to fill.
    """

    def __init__(self, inner):
        self.inner = inner

    async def __call__(self, scope, receive, send):
        query_string = scope.get("query_string", b"").decode()
        query_params = parse_qs(query_string)

        token = query_params.get("token")
        if token:
            scope = dict(scope)
            scope["user"] = await get_user_from_token(token[0])

        return await self.inner(scope, receive, send)
