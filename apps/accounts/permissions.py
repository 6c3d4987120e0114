"""
Capability table: which roles may perform which operation.

Authorization is checked once, at the HTTP boundary, before the request is
handed to the shared guard logic. Resource ownership (a client only sees its
own reservations) is enforced by the guards themselves.
"""
from apps.core.exceptions import UnauthorizedError

from .models import Role

BOOK                  = 'book'
CANCEL                = 'cancel'
CLOSE                 = 'close'
OPEN                  = 'open'
VIEW_OVERVIEW         = 'view_overview'
VIEW_RESERVATIONS     = 'view_reservations'
VIEW_CLOSURES         = 'view_closures'
VIEW_CLIENTS          = 'view_clients'
DOWNLOAD_PACKING_LIST = 'download_packing_list'

CAPABILITIES = {
    BOOK:                  {Role.CLIENT},
    CANCEL:                {Role.CLIENT},
    CLOSE:                 {Role.ADMIN},
    OPEN:                  {Role.ADMIN},
    VIEW_OVERVIEW:         {Role.ADMIN},
    VIEW_RESERVATIONS:     {Role.ADMIN, Role.OPERATOR},
    VIEW_CLOSURES:         {Role.ADMIN, Role.OPERATOR},
    VIEW_CLIENTS:          {Role.ADMIN, Role.OPERATOR},
    DOWNLOAD_PACKING_LIST: {Role.ADMIN, Role.OPERATOR, Role.CLIENT},
}


def has_capability(user, capability: str) -> bool:
    if user is None or not user.is_authenticated or not user.is_active:
        return False
    return user.role in CAPABILITIES.get(capability, ())


def authorize(user, capability: str) -> None:
    """Raise UnauthorizedError unless `user` holds `capability`."""
    if not has_capability(user, capability):
        raise UnauthorizedError()
