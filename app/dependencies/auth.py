from app.core.config import settings


async def get_current_principal() -> str:
    """Identity every storage call is scoped to.

    There is no authentication yet, so this is always the configured default user.
    """
    return settings.DEFAULT_USER_ID
