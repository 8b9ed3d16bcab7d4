from rest_framework import permissions


class IsOwnerOrAdmin(permissions.BasePermission):
    """
    Solo el propietario del recurso o un admin pueden acceder.
    El objeto debe ser el usuario o tener un campo `user`.
    """
    def has_object_permission(self, request, view, obj):
        # Admin puede ver/editar cualquier recurso
        if request.user.is_authenticated and request.user.can_manage_store():
            return True

        owner = getattr(obj, 'user', obj)
        return owner == request.user
