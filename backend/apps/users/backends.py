from django.contrib.auth.backends import ModelBackend
from django.db.models import Q

from .models import User, normalize_phone


class EmailOrUsernameModelBackend(ModelBackend):
    """
    Permite autenticar con email, username o número de teléfono.
    """
    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is None:
            username = kwargs.get(User.USERNAME_FIELD)

        if not username or password is None:
            return None

        lookup = Q(email__iexact=username) | Q(username=username)
        phone = normalize_phone(username)
        if len(phone) > 1:
            lookup |= Q(phone=phone)

        # puede haber coincidencias en campos distintos: se prueba cada una
        candidates = list(User.objects.filter(lookup)[:3])
        if not candidates:
            # hashea igualmente para no revelar por tiempo si el usuario existe
            User().set_password(password)
            return None

        for user in candidates:
            if user.check_password(password) and self.user_can_authenticate(user):
                return user
        return None
