"""Output — render ServiceResult for terminals and machines."""
