import logging

logger = logging.getLogger(__name__)


def get_current_user(request):
    """The signed-in user behind `request`, or None.

    Failing to resolve the user counts as not being signed in.
    """
    try:
        user = request.user
        if user.is_authenticated:
            return user
    except Exception:
        logger.exception('Error resolving current user')
    return None
