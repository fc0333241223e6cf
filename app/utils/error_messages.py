"""Error messages for API responses."""

ERROR_MESSAGES = {
    "team_not_found": {
        "de": "Mannschaft nicht gefunden",
        "en": "Team not found",
    },
    "season_not_found": {
        "de": "Saison nicht gefunden",
        "en": "Season not found",
    },
    "source_unavailable": {
        "de": "Die Datenquelle ist nicht erreichbar",
        "en": "The league data source is unavailable",
    },
    "sync_timeout": {
        "de": "Die Synchronisierung hat das Zeitlimit überschritten",
        "en": "Synchronization exceeded its time limit",
    },
    "sync_failed": {
        "de": "Synchronisierung fehlgeschlagen",
        "en": "Synchronization failed",
    },
}


def get_error_message(error_key: str, lang: str = "en") -> str:
    """Get localized error message.

    Args:
        error_key: Key for the error message
        lang: Language code (de, en)

    Returns:
        Localized error message, falls back to English if not found
    """
    if error_key not in ERROR_MESSAGES:
        return error_key

    messages = ERROR_MESSAGES[error_key]
    return messages.get(lang, messages.get("en", error_key))
