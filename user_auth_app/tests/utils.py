from django.contrib.auth.models import User


def create_user_with_role(username, role, password='password123', banned=False, **extra):
    """
    Creates a user and sets the role on the profile created by the post_save signal.
    """
    user = User.objects.create_user(
        username=username,
        email=extra.pop('email', f'{username}@example.com'),
        password=password,
        **extra
    )
    user.profile.role = role
    user.profile.banned = banned
    user.profile.save()
    return user
