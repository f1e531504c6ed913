from typing import Dict
from sqlalchemy import func, select
from family_logbook.extensions import db
from family_logbook.models.logbook_member import LogbookMember


def get_logbook_stats(*, logbook_id: str) -> Dict[str, int]:
    """
    Counts shown by the home page stats section.

    Photos and comments are stored by external services; their counts
    stay at zero here.
    """
    member_count = db.session.execute(
        select(func.count(LogbookMember.id)).where(LogbookMember.logbook_id == logbook_id)
    ).scalar_one()

    return {
        "member_count": member_count,
        "photo_count": 0,
        "comment_count": 0,
    }
