from clubdir.models.user import User
from clubdir.models.club import Club
from clubdir.models.auth_session import AuthSession
from clubdir.models.audit_log import AuditLog
