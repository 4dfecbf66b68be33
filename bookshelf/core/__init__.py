"""Core — domain types, errors and boundary contracts. No IO lives here."""
