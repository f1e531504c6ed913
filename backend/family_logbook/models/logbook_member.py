from family_logbook.extensions import db
from .base import BaseModel

class LogbookMember(BaseModel):
    __tablename__ = "logbook_members"

    logbook_id = db.Column(db.String(36), db.ForeignKey("logbooks.id"), nullable=False, index=True)
    user_id = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False)  # parent | family | friend
    last_visited_at = db.Column(db.DateTime(timezone=True), nullable=True)

    logbook = db.relationship("Logbook", back_populates="members")
    user = db.relationship("User", back_populates="memberships")

    __table_args__ = (
        db.UniqueConstraint("logbook_id", "user_id", name="uq_logbook_member"),
    )
