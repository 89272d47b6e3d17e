from rest_framework.permissions import BasePermission


class HasRole(BasePermission):
    roles: tuple = ()

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.role not in self.roles:
            self.message = f'Role {user.role} is not authorized to access this resource'
            return False
        return True


def role_required(*roles: str) -> type:
    return type('HasRole', (HasRole,), {'roles': roles})
