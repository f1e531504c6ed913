from family_logbook.domain.exceptions import ValidationError, ConflictError

ROLES = ("parent", "family", "friend")
INVITABLE_ROLES = ("family", "friend")


def assert_role(role, allowed=ROLES):
    if role not in allowed:
        raise ValidationError(f"Invalid role: {role}. Expected one of {list(allowed)}")


def assert_parent_remains(members, *, user_id, new_role=None):
    """
    A logbook must always keep at least one parent.

    ``new_role`` is None when the member is being removed.
    """
    target = next((m for m in members if m.user_id == user_id), None)
    if target is None or target.role != "parent" or new_role == "parent":
        return

    parents = [m for m in members if m.role == "parent"]
    if len(parents) <= 1:
        raise ConflictError("A logbook must keep at least one parent")
