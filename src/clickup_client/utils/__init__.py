"""Pure helpers with no network access."""
