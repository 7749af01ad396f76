"""Model Translations DB — declarative base, timestamps and the transaction scope."""
