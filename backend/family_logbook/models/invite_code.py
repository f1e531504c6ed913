from datetime import datetime, timezone
from family_logbook.extensions import db
from .base import BaseModel

class InviteCode(BaseModel):
    __tablename__ = "invite_codes"

    code = db.Column(db.String(16), unique=True, nullable=False, index=True)
    logbook_id = db.Column(db.String(36), db.ForeignKey("logbooks.id"), nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False)  # family | friend
    max_uses = db.Column(db.Integer, nullable=False, default=10)
    uses_count = db.Column(db.Integer, nullable=False, default=0)
    expires_at = db.Column(db.DateTime(timezone=True), nullable=True)
    created_by = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)

    logbook = db.relationship("Logbook")

    def is_expired(self, now=None):
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            # SQLite drops tzinfo on the way back
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return expires_at < now

    @property
    def is_exhausted(self):
        return bool(self.max_uses) and self.uses_count >= self.max_uses
