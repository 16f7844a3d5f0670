from typing import Iterable, Optional


def identity_of(user) -> Optional[str]:
    """Telegram username of the sender, or None if it cannot be resolved."""
    if user is None:
        return None
    return getattr(user, "username", None) or None


def is_authorized(identity: Optional[str], available_ids: Iterable[str]) -> bool:
    if not identity:
        return False
    for v in available_ids:
        if v == identity:
            return True
    return False
