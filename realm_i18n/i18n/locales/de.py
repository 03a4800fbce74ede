"""German theme strings."""

STRINGS: dict[str, str] = {
    # ---------------------------------------------------------------------------
    # Sidebar / common
    # ---------------------------------------------------------------------------
    "common:realmSettings": "Realm-Einstellungen",
    "common:userFederation": "Benutzer-Föderation",
    "common:clients": "Clients",
    "common:clientScopes": "Client-Scopes",
    "common:realmRoles": "Realm-Rollen",
    "common:users": "Benutzer",
    "common:groups": "Gruppen",
    "common:sessions": "Sitzungen",
    "common:events": "Ereignisse",
    "common:authentication": "Authentifizierung",
    "common:identityProviders": "Identitätsanbieter",
    "common:manage": "Verwalten",
    "common:configure": "Konfigurieren",
    "common:save": "Speichern",
    "common:cancel": "Abbrechen",
    "common:delete": "Löschen",
    "common:localization": "Lokalisierung",

    # ---------------------------------------------------------------------------
    # User federation
    # ---------------------------------------------------------------------------
    "user-federation:addProvider_one": "{{provider}}-Anbieter hinzufügen",
    "user-federation:addProvider_other": "{{provider}}-Anbieter hinzufügen",
    "user-federation:addNewProvider": "Neuen Anbieter hinzufügen",
    "user-federation:providerCount_one": "{{count}} Anbieter konfiguriert",
    "user-federation:providerCount_other": "{{count}} Anbieter konfiguriert",
}
