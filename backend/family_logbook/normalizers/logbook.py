def _iso(value):
    return value.isoformat() if value else None


def normalize_logbook(logbook, membership=None):
    data = {
        "id": logbook.id,
        "slug": logbook.slug,
        "name": logbook.name,
        "baby_name": logbook.baby_name,
        "due_date": _iso(logbook.due_date),
        "theme": logbook.theme,
        "created_at": _iso(logbook.created_at),
    }

    if membership is not None:
        data["role"] = membership.role

    return data


def normalize_member(member):
    return {
        "id": member.id,
        "user_id": member.user_id,
        "email": member.user.email if member.user else None,
        "display_name": member.user.display_name if member.user else None,
        "role": member.role,
        "joined_at": _iso(member.created_at),
    }


def normalize_invite(invite):
    return {
        "id": invite.id,
        "code": invite.code,
        "role": invite.role,
        "max_uses": invite.max_uses,
        "uses_count": invite.uses_count,
        "expires_at": _iso(invite.expires_at),
        "created_at": _iso(invite.created_at),
    }
