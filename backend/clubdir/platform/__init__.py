from clubdir.platform.base import EmailTakenError, InvalidQueryError, Platform, PlatformError
from clubdir.platform.sql import sql_platform
