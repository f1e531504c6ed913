from .user import User
from .logbook import Logbook, THEMES
from .logbook_member import LogbookMember
from .section_override import SectionOverride
from .invite_code import InviteCode
from .audit_log import AuditLog
