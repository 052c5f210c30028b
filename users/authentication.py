"""
JWT authentication for dashboard users.

Tokens are accepted from the ``Authorization: Bearer`` header or from the
``auth-token`` cookie set at login.
"""
from django.conf import settings
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.tokens import AccessToken

from .models import User


def issue_token(user):
    """Access token carrying the id, email and role of ``user``"""
    token = AccessToken.for_user(user)
    token['email'] = user.email
    token['role'] = user.role
    return str(token)


class CookieJWTAuthentication(JWTAuthentication):
    """
    Resolves tokens to ``users.User`` rows instead of Django auth users.
    """

    def authenticate(self, request):
        header = self.get_header(request)
        if header is not None:
            raw_token = self.get_raw_token(header)
        else:
            raw_token = request.COOKIES.get(settings.AUTH_COOKIE_NAME) or None

        if raw_token is None:
            return None

        validated_token = self.get_validated_token(raw_token)
        return self.get_user(validated_token), validated_token

    def get_user(self, validated_token):
        user_id = validated_token.get('user_id')
        if user_id is None:
            raise InvalidToken('Token contained no recognizable user identification')

        try:
            return User.objects.get(id=user_id, status='active')
        except User.DoesNotExist:
            raise InvalidToken('User not found')
