from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend
from django.db.models import Q


class UsernameOrEmailBackend(ModelBackend):
    """Accept either the e-mail address or the username as login identifier."""

    def authenticate(self, request, username=None, password=None, **kwargs):
        if not username or password is None:
            return None
        usermodel = get_user_model()
        # E-mail wins when both an e-mail and a username match.
        candidates = usermodel.objects.filter(
            Q(email__iexact=username) | Q(username__iexact=username)
        )
        user = next(
            (u for u in candidates if u.email.lower() == username.lower()),
            candidates.first(),
        )
        if user is None:
            # Run the hasher once to reduce the timing difference
            usermodel().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user

        return None
