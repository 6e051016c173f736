from functools import lru_cache

from .menu_builder import get_menu_builder


def sidebar(request):
    """Expose the backend sidebar as ``sidebar_menu``.

    The value is a callable so templates that never touch it never build it;
    the template engine calls it on first use and the result is reused for
    the rest of the render.
    """
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return {"sidebar_menu": []}

    @lru_cache(maxsize=1)
    def sidebar_menu():
        return get_menu_builder().get_menu()

    return {"sidebar_menu": sidebar_menu}
