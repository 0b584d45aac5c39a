"""Access to the ``[custom]`` section of the active domain's configuration."""

from protean.utils.globals import current_domain

DEFAULTS = {
    "ORDERS_PAGE_SIZE": 10,
    "DEFAULT_COUNTRY": "India",
    "ADMIN_ROLE": "admin",
}


def setting(name):
    custom = current_domain.config.get("custom") or {}
    return custom.get(name, DEFAULTS.get(name))
