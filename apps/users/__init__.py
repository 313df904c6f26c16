"""Users app package.

Holds the tenant/owner account model and the authentication flows
(signup, login, token refresh). Use ``apps.users.models.CustomUser`` as
the AUTH_USER_MODEL throughout the project and
``apps.users.identity.resolve_identity`` to hand the caller over to the
listing services.
"""
