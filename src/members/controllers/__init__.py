from .member_admin import MemberAdminController
from .members import MemberController

__all__ = ["MemberAdminController", "MemberController"]
