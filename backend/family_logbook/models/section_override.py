from family_logbook.extensions import db
from .base import BaseModel

class SectionOverride(BaseModel):
    """
    Per-logbook deviation from a section's schema defaults.

    visible = NULL means "inherit the default". fields only holds the
    fields that were edited. Rows are never deleted; a reset clears them.
    """
    __tablename__ = "section_overrides"

    logbook_id = db.Column(db.String(36), db.ForeignKey("logbooks.id"), nullable=False)
    page_type = db.Column(db.String(50), nullable=False)
    section_key = db.Column(db.String(100), nullable=False)

    visible = db.Column(db.Boolean, nullable=True)
    fields = db.Column(db.JSON, nullable=False, default=dict)
    updated_by = db.Column(db.String(36), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("logbook_id", "page_type", "section_key", name="uq_section_override"),
        db.Index("idx_section_override_page", "logbook_id", "page_type"),
    )
