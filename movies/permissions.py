from rest_framework.permissions import BasePermission


class IsMovieOwner(BasePermission):
    """ Custom permission for Movie: only the owner may read or change it """

    def has_object_permission(self, request, view, obj):
        # Querysets are already scoped to the owner, this guards any object that slips past them
        return obj.owner_id == request.user.pk
