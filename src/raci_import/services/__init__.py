"""Import services: normalization, validation, counting, orchestration."""
