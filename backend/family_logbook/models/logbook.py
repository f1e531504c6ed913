from family_logbook.extensions import db
from .base import BaseModel

THEMES = ("forest-light", "forest-dark", "soft-pastels")

class Logbook(BaseModel):
    __tablename__ = "logbooks"

    slug = db.Column(db.String(200), unique=True, nullable=False, index=True)
    name = db.Column(db.String(200), nullable=False)
    baby_name = db.Column(db.String(200), nullable=True)
    due_date = db.Column(db.Date, nullable=True)
    theme = db.Column(db.String(50), nullable=False, default="forest-light")
    created_by = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=False)

    members = db.relationship(
        "LogbookMember",
        back_populates="logbook",
        cascade="all, delete-orphan"
    )
