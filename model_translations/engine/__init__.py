"""Model Translations Engine — errors, configuration, locale context, logging."""
