from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model

User = get_user_model()


class EmailBackend(ModelBackend):
    """
    Email + password login. Emails are only unique per organization, so every
    account sharing the address is tried and the first password match wins.
    """
    def authenticate(self, request, username=None, password=None, **kwargs):
        email = kwargs.get("email") or username
        if email is None or password is None:
            return None

        candidates = User.objects.filter(email__iexact=email.strip()).select_related("org")
        for user in candidates:
            if user.check_password(password) and self.user_can_authenticate(user):
                return user

        # Run the hasher once to reduce the timing difference for unknown emails
        if not candidates:
            User().set_password(password)
        return None

    def get_user(self, user_id):
        try:
            user = User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return None
        return user if self.user_can_authenticate(user) else None
