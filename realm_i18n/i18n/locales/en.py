"""English theme strings (fallback locale).

Every key that any other bundled locale defines must be present here;
``ThemeBundle.validate()`` enforces this at startup.
"""

STRINGS: dict[str, str] = {
    # ---------------------------------------------------------------------------
    # Sidebar / common
    # ---------------------------------------------------------------------------
    "common:realmSettings": "Realm settings",
    "common:userFederation": "User federation",
    "common:clients": "Clients",
    "common:clientScopes": "Client scopes",
    "common:realmRoles": "Realm roles",
    "common:users": "Users",
    "common:groups": "Groups",
    "common:sessions": "Sessions",
    "common:events": "Events",
    "common:authentication": "Authentication",
    "common:identityProviders": "Identity providers",
    "common:manage": "Manage",
    "common:configure": "Configure",
    "common:save": "Save",
    "common:cancel": "Cancel",
    "common:delete": "Delete",
    "common:localization": "Localization",
    "common:supportedLocales": "Supported locales",
    "common:defaultLocale": "Default locale",

    # ---------------------------------------------------------------------------
    # User federation
    # ---------------------------------------------------------------------------
    "user-federation:providers": "Add providers",
    "user-federation:addProvider_one": "Add {{provider}} provider",
    "user-federation:addProvider_other": "Add {{provider}} providers",
    "user-federation:getStarted": "To get started, select a provider from the list below.",
    "user-federation:addNewProvider": "Add new provider",
    "user-federation:providerCount_one": "{{count}} provider configured",
    "user-federation:providerCount_other": "{{count}} providers configured",
}
